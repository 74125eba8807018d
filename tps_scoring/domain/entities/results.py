"""Per-framework classification results.

Each result carries a ``framework`` tag so the union ``FrameworkResult``
can be dispatched on without inspecting the payload shape.
"""

from typing import Annotated, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class MBTIDimension(CamelModel):
    letter: str
    score: float
    threshold: float
    strength: float
    confidence: float


class CognitiveFunction(CamelModel):
    function: str
    position: str
    strength: float


class MBTIResult(CamelModel):
    framework: Literal["mbti"] = "mbti"
    type: str
    dimensions: Dict[str, MBTIDimension]
    cognitive_functions: List[CognitiveFunction] = Field(default_factory=list)
    confidence: float = 50.0


class InstinctualVariant(CamelModel):
    primary: str
    secondary: str


class EnneagramResult(CamelModel):
    framework: Literal["enneagram"] = "enneagram"
    type: int
    wing: int
    tritype: str
    scores: Dict[str, float]
    instinctual_variant: InstinctualVariant
    health_level: str
    wing_influence: float
    confidence: float

    @property
    def label(self) -> str:
        return f"Type {self.type}"


class BigFiveResult(CamelModel):
    framework: Literal["bigfive"] = "bigfive"
    dimensions: Dict[str, float]


class HollandResult(CamelModel):
    framework: Literal["holland"] = "holland"
    code: str
    scores: Dict[str, float]
    primary_type: str
    secondary_type: str
    confidence: float


class AlignmentAxis(CamelModel):
    position: str
    scores: Dict[str, float]
    margin: float


class AlignmentResult(CamelModel):
    framework: Literal["alignment"] = "alignment"
    alignment: str
    ethical: AlignmentAxis
    moral: AlignmentAxis
    confidence: float


class SocionicsResult(CamelModel):
    framework: Literal["socionics"] = "socionics"
    type: str
    code: str
    leading: str
    creative: str
    element_scores: Dict[str, float]
    confidence: float


class AttachmentResult(CamelModel):
    framework: Literal["attachment"] = "attachment"
    style: str
    score: float
    scores: Dict[str, float]
    confidence: float
    description: str
    characteristics: List[str] = Field(default_factory=list)


class IntegralLevelInfo(CamelModel):
    color: str
    number: int
    name: str
    cognitive_stage: str
    worldview: str
    thinking_pattern: str
    score: float


class RealityTriadMapping(CamelModel):
    physical: float
    social: float
    universal: float


class IntegralDetail(CamelModel):
    framework: Literal["integral"] = "integral"
    primary_level: IntegralLevelInfo
    secondary_level: Optional[IntegralLevelInfo] = None
    confidence: float
    cognitive_complexity: float
    reality_triad_mapping: RealityTriadMapping
    developmental_edge: str
    level_scores: Dict[str, float]


FrameworkResult = Annotated[
    Union[
        MBTIResult,
        EnneagramResult,
        BigFiveResult,
        HollandResult,
        AlignmentResult,
        SocionicsResult,
        AttachmentResult,
        IntegralDetail,
    ],
    Field(discriminator="framework"),
]
