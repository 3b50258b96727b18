"""Tests for core/profiles.py - Install profiles."""

import pytest

from blue_gardener.core.catalog import Catalog
from blue_gardener.core.errors import ConfigurationError
from blue_gardener.core.profiles import AGENT_PROFILES, get_profile, get_profiles


class TestBundledProfiles:

    def test_profiles_only_reference_bundled_agents(self):
        catalog = Catalog()
        for profile in AGENT_PROFILES:
            missing = [name for name in profile.agent_names if name not in catalog]
            assert missing == [], f"profile {profile.id} names unknown agents"

    def test_profile_ids_are_unique(self):
        ids = [profile.id for profile in AGENT_PROFILES]
        assert len(ids) == len(set(ids))

    def test_expected_profiles(self):
        assert {profile.id for profile in AGENT_PROFILES} == {
            "core", "orchestration", "frontend-react", "backend-node", "infrastructure", "blockchain",
        }

    def test_profile_sizes(self):
        sizes = {profile.id: len(profile.agent_names) for profile in AGENT_PROFILES}
        assert sizes == {
            "core": 19, "orchestration": 8, "frontend-react": 15,
            "backend-node": 10, "infrastructure": 5, "blockchain": 11,
        }

    def test_orchestrators_lead_core(self):
        assert get_profile("core").agent_names[:5] == (
            "blue-feature-specification-analyst",
            "blue-architecture-designer",
            "blue-refactoring-strategy-planner",
            "blue-app-quality-gate-keeper",
            "blue-implementation-review-coordinator",
        )
        assert "blue-e2e-testing-specialist" in get_profile("core").agent_names


class TestGetProfile:

    def test_bundled(self):
        assert "blue-react-developer" in get_profile("frontend-react").agent_names

    def test_unknown_lists_available(self):
        with pytest.raises(ConfigurationError, match="Available profiles: core"):
            get_profile("nope")

    def test_user_profile(self):
        user = {"mine": {"name": "Mine", "agents": ["blue-docker-specialist"]}}
        profile = get_profile("mine", user)
        assert profile.name == "Mine"
        assert profile.agent_names == ("blue-docker-specialist",)

    def test_user_profile_overrides_bundled(self):
        user = {"core": {"agents": ["blue-docker-specialist"]}}
        profiles = get_profiles(user)

        assert [p.id for p in profiles].count("core") == 1
        assert get_profile("core", user).agent_names == ("blue-docker-specialist",)
        assert get_profile("core", user).name == "core"
