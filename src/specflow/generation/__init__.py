"""Generation engine for rule-based backlog creation.

This module provides tools to:
- Tokenize and classify free text (analyzer.py, taxonomy.py)
- Generate user stories (stories.py)
- Generate engineering tasks, including template tasks (tasks.py)
- Generate risks and assumptions (risks.py)
- Assemble everything into a Spec (assembler.py)
"""

from .analyzer import detect_component, detect_user_types, mentions_any, normalize
from .assembler import SpecAssembler, assign_priority, feature_name, generate_spec
from .drafts import ItemDraft, RiskDraft
from .risks import generate_risks
from .stories import generate_stories
from .tasks import assign_phase, generate_base_tasks, generate_tasks, get_template_tasks

__all__ = [
    "normalize",
    "mentions_any",
    "detect_component",
    "detect_user_types",
    "generate_stories",
    "generate_base_tasks",
    "get_template_tasks",
    "generate_tasks",
    "assign_phase",
    "generate_risks",
    "assign_priority",
    "feature_name",
    "SpecAssembler",
    "generate_spec",
    "ItemDraft",
    "RiskDraft",
]
