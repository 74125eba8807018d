"""Typology classifiers.

Every classifier is a pure ``classify(trait_scores, domain_scores, overrides)``.
"""

from . import alignment, attachment, bigfive, enneagram, holland, integral, mbti, socionics

CLASSIFIERS = {
    "mbti": mbti.classify,
    "enneagram": enneagram.classify,
    "bigfive": bigfive.classify,
    "holland": holland.classify,
    "alignment": alignment.classify,
    "socionics": socionics.classify,
    "attachment": attachment.classify,
    "integral": integral.classify,
}

__all__ = [
    "CLASSIFIERS",
    "alignment",
    "attachment",
    "bigfive",
    "enneagram",
    "holland",
    "integral",
    "mbti",
    "socionics",
]
