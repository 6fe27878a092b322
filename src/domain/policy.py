from collections.abc import Sequence

from src.domain.entities import Actor, AuthorizationDecision
from src.rules.models import Rules


class PolicyEngine:
    """Role-based capability checks driven by the rbac section of rules.yaml.

    Stateless apart from the loaded rules, so one instance is shared across requests.
    """

    def __init__(self, rules: Rules):
        self.rules = rules

    def decide(self, actor: Actor | None, capability: str) -> AuthorizationDecision:
        """
        Decide whether the actor holds the capability.

        Order of precedence:
        1. Public permissions (no actor needed)
        2. Role-based grants, including "*" and "scope:*" wildcards
        """
        if capability in self.rules.rbac.public_permissions:
            return AuthorizationDecision(allowed=True)

        if actor is None:
            return AuthorizationDecision(allowed=False, reason="ANONYMOUS")

        if self._roles_grant(actor.roles, capability):
            return AuthorizationDecision(allowed=True)

        return AuthorizationDecision(allowed=False, reason="MISSING_CAPABILITY")

    def is_authorized(self, actor: Actor | None, capability: str) -> bool:
        return self.decide(actor, capability).allowed

    def _roles_grant(self, roles: Sequence[str], capability: str) -> bool:
        scope = capability.split(":")[0] if ":" in capability else None
        for role in roles:
            allowed = self.rules.rbac.roles.get(role, [])
            if "*" in allowed or capability in allowed:
                return True
            if scope is not None and f"{scope}:*" in allowed:
                return True
        return False
