"""sqliterest policy layer."""
from sqliterest.policy.engine import PolicyConfig, PolicyEngine

__all__ = ["PolicyConfig", "PolicyEngine"]
