"""
Heuristics for detecting the commit title convention of a repository.

A previous automation commit is the strongest signal: if it used a known
style, that style is reused as is. Otherwise the convention is inferred
from the share of recent human commit messages matching each known
vocabulary:

* Angular (``feat:``, ``fix(core):``...), see
  https://github.com/angular/angular/blob/main/CONTRIBUTING.md#commit
* ESLint (``Fix:``, ``Upgrade:``...), see
  https://eslint.org/docs/developer-guide/contributing/pull-requests
* gitmoji (``:sparkles:``...), see https://gitmoji.dev
* any lowercase word followed by a colon.

The detectors run in :data:`STYLE_DETECTORS` order and the first match
wins.
"""

from __future__ import annotations

import logging
import re
from typing import Callable, List, Optional, Sequence, Tuple

from pr_name_prefixer.style.decision import CommitStyle, StyleDecision


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


ANGULAR_PREFIXES = [
    "build", "chore", "ci", "docs", "feat", "fix", "perf", "refactor", "style", "test",
]
ESLINT_PREFIXES = [
    "Breaking", "Build", "Chore", "Docs", "Fix", "New", "Update", "Upgrade",
]
GITMOJI_PREFIXES = [
    "alien", "ambulance", "apple", "arrow_down", "arrow_up", "art", "beers",
    "bento", "bookmark", "boom", "bug", "building_construction", "bulb",
    "busts_in_silhouette", "camera_flash", "card_file_box",
    "chart_with_upwards_trend", "checkered_flag", "children_crossing",
    "clown_face", "construction", "construction_worker", "egg", "fire",
    "globe_with_meridians", "green_apple", "green_heart", "hankey",
    "heavy_minus_sign", "heavy_plus_sign", "iphone", "lipstick", "lock",
    "loud_sound", "memo", "mute", "ok_hand", "package", "page_facing_up",
    "pencil2", "penguin", "pushpin", "recycle", "rewind", "robot", "rocket",
    "rotating_light", "see_no_evil", "sparkles", "speech_balloon", "tada",
    "truck", "twisted_rightwards_arrows", "whale", "wheelchair",
    "white_check_mark", "wrench", "zap",
]

GITMOJI_UPGRADE = "⬆️"

ESLINT_ONLY_PREFIXES = [
    p.lower() for p in ESLINT_PREFIXES if p.lower() not in ANGULAR_PREFIXES
]
ANGULAR_ONLY_PREFIXES = [
    p for p in ANGULAR_PREFIXES if p not in {e.lower() for e in ESLINT_PREFIXES}
]

_PRIOR_CONVENTIONAL = re.compile(r"^(chore|build|upgrade):", re.IGNORECASE)
_PRIOR_CONVENTIONAL_WITH_SCOPE = re.compile(r"^(chore|build|upgrade)\(", re.IGNORECASE)
_GENERIC_PREFIX = re.compile(r"^[a-z]\S+:")


def _vocabulary_pattern(words: Sequence[str], flags: int = re.IGNORECASE) -> re.Pattern:
    return re.compile("(?:" + "|".join(re.escape(w) for w in words) + ")[:(]", flags)


_ANGULAR = _vocabulary_pattern(ANGULAR_PREFIXES)
_ANGULAR_ONLY = _vocabulary_pattern(ANGULAR_ONLY_PREFIXES)
_ESLINT_ONLY = _vocabulary_pattern(ESLINT_ONLY_PREFIXES)
_ESLINT_START = _vocabulary_pattern(ESLINT_PREFIXES, flags=0)
_GITMOJI = re.compile(
    ":(?:" + "|".join(re.escape(w) for w in GITMOJI_PREFIXES) + "):", re.IGNORECASE
)


def _ratio(matching: int, total: int) -> float:
    return matching / float(total)


def angular_messages(messages: Sequence[str]) -> List[str]:
    """Return the messages containing an Angular type followed by ``:`` or ``(``."""
    return [m for m in messages if _ANGULAR.search(m)]


def detect_prior_style(message: Optional[str]) -> Optional[StyleDecision]:
    """Recognise the style of a previous automation commit message.

    Returns ``None`` when there is no message or its style is unknown.
    For the conventional styles the token is the message's leading word,
    with its original casing.
    """
    if not message:
        return None
    if message.startswith(GITMOJI_UPGRADE):
        return StyleDecision(CommitStyle.GITMOJI, from_prior_commit=True)

    token = re.split(r"[:(]", message, maxsplit=1)[0]
    if _PRIOR_CONVENTIONAL.match(message):
        return StyleDecision(CommitStyle.CONVENTIONAL_PREFIX, token, from_prior_commit=True)
    if _PRIOR_CONVENTIONAL_WITH_SCOPE.match(message):
        return StyleDecision(
            CommitStyle.CONVENTIONAL_PREFIX_WITH_SCOPE, token, from_prior_commit=True
        )
    return None


def using_angular_commit_messages(messages: Sequence[str]) -> bool:
    if not messages:
        return False

    # Definitely not using Angular commits if < 30% match
    if _ratio(len(angular_messages(messages)), len(messages)) < 0.3:
        return False

    uses_angular_only = any(_ANGULAR_ONLY.search(m) for m in messages)
    uses_eslint_only = any(_ESLINT_ONLY.search(m) for m in messages)

    # Angular wins when both vocabularies show up
    if uses_angular_only:
        return True
    if uses_eslint_only:
        return False
    return True


def using_eslint_commit_messages(messages: Sequence[str]) -> bool:
    if not messages:
        return False
    semantic = [m for m in messages if _ESLINT_START.match(m)]
    return _ratio(len(semantic), len(messages)) > 0.3


def using_gitmoji_commit_messages(messages: Sequence[str]) -> bool:
    if not messages:
        return False
    gitmoji = [m for m in messages if _GITMOJI.search(m)]
    return _ratio(len(gitmoji), len(messages)) > 0.3


def using_prefixed_commit_messages(messages: Sequence[str]) -> bool:
    if using_gitmoji_commit_messages(messages):
        return False
    if not messages:
        return False
    prefixed = [m for m in messages if _GENERIC_PREFIX.match(m)]
    return _ratio(len(prefixed), len(messages)) > 0.3


def capitalize_angular_commit_prefix(
    messages: Sequence[str], last_automation_message: Optional[str] = None
) -> bool:
    """Return True if most Angular-style messages start with a capital letter.

    Without any Angular-style message, the casing of the previous
    automation commit decides.
    """
    semantic = angular_messages(messages)
    if not semantic:
        return bool(last_automation_message and re.match(r"[A-Z]", last_automation_message))
    capitalized = [m for m in semantic if re.match(r"[A-Z]", m)]
    return _ratio(len(capitalized), len(semantic)) > 0.5


def angular_commit_prefix(
    messages: Sequence[str], last_automation_message: Optional[str] = None
) -> str:
    """Choose between ``chore`` and ``build`` for an Angular repository."""
    if not using_angular_commit_messages(messages):
        raise ValueError("Not using angular commit messages")

    semantic = angular_messages(messages)
    uses_chore = any(m.startswith(("chore", "Chore")) for m in semantic)
    uses_build = any(m.startswith(("build", "Build")) for m in semantic)
    prefix = "chore" if uses_chore and not uses_build else "build"

    if capitalize_angular_commit_prefix(messages, last_automation_message):
        prefix = prefix.capitalize()
    return prefix


Detector = Callable[[Sequence[str], Optional[str]], Tuple[bool, Optional[str]]]


def _detect_angular(messages, last_automation_message):
    if not using_angular_commit_messages(messages):
        return False, None
    return True, angular_commit_prefix(messages, last_automation_message)


def _detect_eslint(messages, last_automation_message):
    return using_eslint_commit_messages(messages), "Upgrade"


def _detect_gitmoji(messages, last_automation_message):
    return using_gitmoji_commit_messages(messages), None


def _detect_prefixed(messages, last_automation_message):
    return using_prefixed_commit_messages(messages), None


# Ordered by precedence
STYLE_DETECTORS: List[Tuple[CommitStyle, Detector]] = [
    (CommitStyle.CONVENTIONAL_PREFIX_WITH_SCOPE, _detect_angular),
    (CommitStyle.CONVENTIONAL_PREFIX, _detect_eslint),
    (CommitStyle.GITMOJI, _detect_gitmoji),
    (CommitStyle.GENERIC_PREFIXED, _detect_prefixed),
]


def infer_style(
    messages: Sequence[str], last_automation_message: Optional[str] = None
) -> StyleDecision:
    """Decide the commit title convention of a repository.

    Parameters
    ----------
    messages : Sequence[str]
        Recent human commit messages.
    last_automation_message : str, optional
        Message of the newest commit made by the automation itself.

    Returns
    -------
    StyleDecision
        Exactly one decision; ``CommitStyle.NONE`` when nothing matches.
    """
    prior = detect_prior_style(last_automation_message)
    if prior is not None:
        logger.debug("Reusing style of previous automation commit: %s", prior.style.value)
        return prior

    for style, detector in STYLE_DETECTORS:
        matched, token = detector(messages, last_automation_message)
        if matched:
            logger.debug("Detected %s style from %d commits", style.value, len(messages))
            return StyleDecision(style, token)
    return StyleDecision(CommitStyle.NONE)
