"""
Pull request title prefixes consistent with a repository's conventions.

:class:`PrNamePrefixer` is the entry point. It asks the commit history
for the previous automation commit and the recent human commits, lets
:func:`infer_style` pick a convention and turns the decision into the
literal prefix, e.g. ``"build(deps): "``, ``"Upgrade: "`` or ``"⬆️ "``.
Security updates additionally get a ``[security]`` tag (or a lock emoji
for gitmoji repositories).

The history is fetched once per instance, so one instance should be
used for everything related to a single pull request.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, Iterable, List, Optional, Sequence

from pr_name_prefixer.history.commit_history import CommitHistory, build_commit_history
from pr_name_prefixer.models import Dependency, Source
from pr_name_prefixer.style.classifier import (
    ANGULAR_PREFIXES,
    ESLINT_PREFIXES,
    GITMOJI_UPGRADE,
    infer_style,
    using_angular_commit_messages,
    using_eslint_commit_messages,
)
from pr_name_prefixer.style.decision import CommitStyle, StyleDecision


logger = logging.getLogger(__name__)
if not logger.handlers:
    logger.addHandler(logging.NullHandler())
    logger.propagate = False


GITMOJI_PREFIX = f"{GITMOJI_UPGRADE} "
GITMOJI_SECURITY_PREFIX = "🔒 "

_SEMANTIC = re.compile(
    "(?:" + "|".join(re.escape(p) for p in ANGULAR_PREFIXES + ESLINT_PREFIXES) + ")[:(]",
    re.IGNORECASE,
)
_PRIOR_CAPITALIZED = re.compile(r": (\[Security\] )?(B|U)")


def scope_for(dependencies: Iterable[Dependency]) -> str:
    """Return ``"deps"`` if any dependency is a production one, else ``"deps-dev"``."""
    return "deps" if any(dep.production for dep in dependencies) else "deps-dev"


def commit_prefix(decision: StyleDecision, scope: str) -> str:
    """Return the base prefix for ``decision``, without any security tag."""
    if decision.style is CommitStyle.GITMOJI:
        return GITMOJI_PREFIX
    if decision.style is CommitStyle.CONVENTIONAL_PREFIX:
        return f"{decision.token}: "
    if decision.style is CommitStyle.CONVENTIONAL_PREFIX_WITH_SCOPE:
        return f"{decision.token}({scope}): "
    if decision.style is CommitStyle.GENERIC_PREFIXED:
        return f"build({scope}): "
    return ""


def build_prefix(
    decision: StyleDecision, scope: str, is_security_fix: bool, capitalize: bool
) -> str:
    """Compose the final pull request title prefix.

    Parameters
    ----------
    decision : StyleDecision
        The detected convention.
    scope : str
        ``"deps"`` or ``"deps-dev"``.
    is_security_fix : bool
        Whether the pull request fixes a vulnerability.
    capitalize : bool
        Casing of the ``[Security]`` tag; ignored for gitmoji.
    """
    base = commit_prefix(decision, scope)
    prefix = base
    if is_security_fix:
        if base == GITMOJI_PREFIX:
            prefix += GITMOJI_SECURITY_PREFIX
        else:
            prefix += "[Security] " if capitalize else "[security] "
    return prefix.replace(f"{GITMOJI_UPGRADE} 🔒", f"{GITMOJI_UPGRADE}🔒")


def capitalize_first_word(
    decision: StyleDecision,
    messages: Sequence[str],
    last_automation_message: Optional[str],
    scope: str,
) -> bool:
    """Return True if the first word after the prefix should be capitalized.

    A previous automation commit is followed as is. Otherwise the casing
    after the colon of Angular/ESLint style messages decides when it is
    consistent; failing that, the casing of the prefix itself.
    """
    if decision.from_prior_commit:
        if decision.style is CommitStyle.GITMOJI:
            return True
        if decision.style in (
            CommitStyle.CONVENTIONAL_PREFIX,
            CommitStyle.CONVENTIONAL_PREFIX_WITH_SCOPE,
        ):
            return bool(_PRIOR_CAPITALIZED.search(last_automation_message or ""))

    if using_angular_commit_messages(messages) or using_eslint_commit_messages(messages):
        semantic = [m for m in messages if _SEMANTIC.search(m)]
        if all(re.search(r":\s+\[?[A-Z]", m) for m in semantic):
            return True
        if all(re.search(r":\s+\[?[a-z]", m) for m in semantic):
            return False

    return not re.match(r"[a-z]", commit_prefix(decision, scope))


class PrNamePrefixer:
    """Build the title prefix for a dependency update pull request.

    Parameters
    ----------
    source : Source
        Repository the pull request targets.
    dependencies : Iterable[Dependency]
        Dependencies updated by the pull request; must not be empty.
    security_fix : bool, optional
        Whether the update fixes a vulnerability.
    config : dict, optional
        Configuration as returned by :func:`load_config`.
    history : CommitHistory, optional
        Pre-built history; overrides ``config`` and ``client``.
    client : object, optional
        Host client used to build the history.

    Raises
    ------
    UnsupportedProviderError
        If the source's provider is not supported.
    ValueError
        If ``dependencies`` is empty.
    """

    def __init__(
        self,
        source: Source,
        dependencies: Iterable[Dependency],
        security_fix: bool = False,
        config: Optional[Dict[str, Any]] = None,
        history: Optional[CommitHistory] = None,
        client: Any = None,
    ) -> None:
        self.source = source
        self.dependencies: List[Dependency] = list(dependencies)
        if not self.dependencies:
            raise ValueError("At least one dependency is required")
        self.security_fix = security_fix
        if history is None:
            history = build_commit_history(source, config=config, client=client)
        self.history = history
        self._decision: Optional[StyleDecision] = None

    @property
    def scope(self) -> str:
        return scope_for(self.dependencies)

    @property
    def decision(self) -> StyleDecision:
        if self._decision is None:
            self._decision = infer_style(
                self.history.recent_commit_messages(),
                self.history.last_automation_commit_message(),
            )
        return self._decision

    def capitalize_first_word(self) -> bool:
        return capitalize_first_word(
            self.decision,
            self.history.recent_commit_messages(),
            self.history.last_automation_commit_message(),
            self.scope,
        )

    def pr_name_prefix(self) -> str:
        capitalize = (
            self.capitalize_first_word()
            if self.security_fix and self.decision.style is not CommitStyle.GITMOJI
            else False
        )
        prefix = build_prefix(self.decision, self.scope, self.security_fix, capitalize)
        logger.debug(
            "PR name prefix for %s (%s): %r", self.source.repo, self.decision.style.value, prefix
        )
        return prefix


def pr_name_prefix(
    source: Source,
    dependencies: Iterable[Dependency],
    security_fix: bool = False,
    **kwargs: Any,
) -> str:
    """Shortcut for ``PrNamePrefixer(...).pr_name_prefix()``."""
    return PrNamePrefixer(source, dependencies, security_fix=security_fix, **kwargs).pr_name_prefix()
