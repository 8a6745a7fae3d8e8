"""
Commit style detection.

This package infers which title convention a repository uses. See
:mod:`pr_name_prefixer.style.classifier` for the heuristics and
:mod:`pr_name_prefixer.style.decision` for the result model.
"""

from .classifier import infer_style  # noqa: F401
from .decision import CommitStyle, StyleDecision  # noqa: F401
