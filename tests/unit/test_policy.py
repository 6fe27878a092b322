import pytest

from src.domain.entities import Actor
from src.domain.policy import PolicyEngine
from src.rules.models import ProjectRules, RbacRules, Rules


@pytest.fixture
def engine(policy):
    return policy


def test_anonymous_denied_for_gated_capability(engine):
    decision = engine.decide(None, "users:lock")

    assert decision.allowed is False
    assert decision.reason == "ANONYMOUS"
    assert engine.is_authorized(None, "users:lock") is False


def test_public_permission_allowed_without_actor(engine):
    assert engine.is_authorized(None, "health:read") is True


def test_admin_scope_wildcard(engine):
    admin = Actor(id="a", roles=("admin",))
    # admin has "users:*"
    assert engine.is_authorized(admin, "users:lock") is True
    assert engine.is_authorized(admin, "users:manage_roles") is True
    assert engine.is_authorized(admin, "settings:edit") is False


def test_owner_global_wildcard(engine):
    owner = Actor(id="o", roles=("owner",))
    assert engine.is_authorized(owner, "anything:really") is True


def test_support_can_lock_but_not_manage_roles(engine):
    support = Actor(id="s", roles=("support",))
    assert engine.is_authorized(support, "users:lock") is True
    assert engine.is_authorized(support, "users:manage_roles") is False


def test_viewer_missing_capability(engine):
    viewer = Actor(id="v", roles=("viewer",))
    decision = engine.decide(viewer, "users:lock")

    assert decision.allowed is False
    assert decision.reason == "MISSING_CAPABILITY"


def test_actor_without_roles_denied(engine):
    assert engine.is_authorized(Actor(id="nobody"), "users:lock") is False


def test_any_matching_role_is_enough(engine):
    actor = Actor(id="m", roles=("viewer", "support"))
    assert engine.is_authorized(actor, "users:lock") is True


def test_unknown_role_in_rules_grants_nothing():
    rules = Rules(
        project=ProjectRules(slug="t", rules_version="1"),
        rbac=RbacRules(roles={"admin": ["users:lock"]}),
    )
    engine = PolicyEngine(rules)

    assert engine.is_authorized(Actor(id="x", roles=("support",)), "users:lock") is False
    assert engine.is_authorized(Actor(id="y", roles=("admin",)), "users:lock") is True
