"""
AutoClassName Classifier Package.

New-script detection and class name insertion.
Requires Python 3.11+.
"""

from classifier.heuristics import (
    ContentShape,
    ScriptSyntax,
    analyze_content,
    derive_class_name,
    has_declaration,
    looks_freshly_created,
    prepend_declaration,
)
from classifier.new_file_classifier import NewFileClassifier, Outcome

__all__ = [
    # Heuristics
    "ContentShape",
    "ScriptSyntax",
    "analyze_content",
    "derive_class_name",
    "has_declaration",
    "looks_freshly_created",
    "prepend_declaration",
    # Classifier
    "NewFileClassifier",
    "Outcome",
]
