"""Integral development questionnaire bank."""

from dataclasses import dataclass, field
from typing import Dict, List

LEVEL_KEYS = ("red", "amber", "orange", "green", "teal", "turquoise")

PRIMARY_WEIGHT = 5
NEXT_LEVEL_WEIGHT = 2
PREVIOUS_LEVEL_WEIGHT = 1


@dataclass(frozen=True)
class IntegralOption:
    text: str
    scores: Dict[str, int]


@dataclass(frozen=True)
class IntegralQuestion:
    id: int
    question: str
    category: str
    options: List[IntegralOption] = field(default_factory=list)


def _option(text: str, level: str) -> IntegralOption:
    index = LEVEL_KEYS.index(level)
    scores = {key: 0 for key in LEVEL_KEYS}
    scores[level] = PRIMARY_WEIGHT
    if index + 1 < len(LEVEL_KEYS):
        scores[LEVEL_KEYS[index + 1]] = NEXT_LEVEL_WEIGHT
    if index > 0:
        scores[LEVEL_KEYS[index - 1]] = PREVIOUS_LEVEL_WEIGHT
    return IntegralOption(text=text, scores=scores)


def _question(qid: int, question: str, category: str, texts: List[str]) -> IntegralQuestion:
    return IntegralQuestion(
        id=qid,
        question=question,
        category=category,
        options=[_option(text, level) for text, level in zip(texts, LEVEL_KEYS)],
    )


INTEGRAL_QUESTIONS: List[IntegralQuestion] = [
    _question(1, "When facing a complex problem, how do you typically approach it?", "systems-thinking", [
        "I act quickly and decisively to get what I need",
        "I follow established procedures and rules",
        "I analyze the data and create a strategic plan",
        "I consider how it affects everyone involved and seek consensus",
        "I look at multiple perspectives and integrate different approaches",
        "I connect with deeper patterns and universal principles at play",
    ]),
    _question(2, "When people disagree with you, what is your typical response?", "perspective-taking", [
        "I push back until they see it my way",
        "I point to what the rules or authorities say",
        "I argue from evidence and try to win on the merits",
        "I try to understand their feelings and find common ground",
        "I look for what is partially true in each view",
        "I see the disagreement as part of a larger unfolding pattern",
    ]),
    _question(3, "How do you think about rules and authority in society?", "authority", [
        "Rules are for those without the strength to ignore them",
        "Rules keep order and should be respected",
        "Rules are useful when they produce good results",
        "Rules should protect the vulnerable and include everyone",
        "Rules are context dependent tools inside larger systems",
        "Rules are temporary expressions of deeper natural order",
    ]),
    _question(4, "When encountering contradictory information, how do you respond?", "paradox-tolerance", [
        "I go with whatever serves me right now",
        "I trust the source I consider legitimate",
        "I test which claim has the better evidence",
        "I accept that different people hold different truths",
        "I hold both and look for the frame where each makes sense",
        "I treat contradiction as a doorway to a wider view",
    ]),
    _question(5, "What motivates you most in making important life decisions?", "meta-cognitive", [
        "Getting respect and not being pushed around",
        "Doing what is right and expected of me",
        "Achieving my goals and advancing",
        "Harmony and the wellbeing of the people around me",
        "Learning, growth and functional fit",
        "Contributing to the wellbeing of all life",
    ]),
    _question(6, "How do you prefer to learn new concepts?", "complexity", [
        "By jumping in and trying it myself",
        "From an expert or trusted authority",
        "Through structured study and measurable progress",
        "Through dialogue and shared experience",
        "By mapping how the concept connects to other fields",
        "Through direct insight and contemplation",
    ]),
    _question(7, "When considering global issues like climate change, what's your primary focus?", "systems-thinking", [
        "How it affects me and mine right now",
        "What the responsible institutions should do",
        "Technological and market solutions",
        "Justice for the communities most affected",
        "Interacting systems and leverage points",
        "The health of the planet as a living whole",
    ]),
    _question(8, "What's your approach to making ethical decisions?", "meta-cognitive", [
        "Whatever works for me",
        "Follow the moral code I was raised with",
        "Weigh the costs and benefits",
        "Consider everyone's feelings and perspectives",
        "Look at the whole system and long-term effects",
        "Act from a sense of connection to everything",
    ]),
]


def get_question(question_id: int):
    return next((q for q in INTEGRAL_QUESTIONS if q.id == question_id), None)
