"""
Rule engine and schema configuration management.
"""

from .rule_config import RuleConfigBuilder, RuleConfigLoader, build_default_registry
from .rule_engine import VALIDATOR_REGISTRY, RuleEngine

__all__ = [
    "RuleEngine",
    "RuleConfigLoader",
    "RuleConfigBuilder",
    "VALIDATOR_REGISTRY",
    "build_default_registry",
]
