"""
AutoClassName Plugin Package.

Requires Python 3.11+.
"""

from plugin.auto_class_name import METADATA, AutoClassNamePlugin, ScanResult

__all__ = ["METADATA", "AutoClassNamePlugin", "ScanResult"]
