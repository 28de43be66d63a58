"""Tests for splitting caller meta into a Sentry payload."""

import copy

from logfacade.partition import ErrorReport, partition, resolve_env


class TestPartition:
    def test_absent_meta(self):
        result = partition()
        assert result == ErrorReport(tags={"env": "test"}, extra={})
        assert result.fingerprint is None
        assert result.level is None
        assert result.to_dict() == {"tags": {"env": "test"}, "extra": {}}

    def test_fallback_env_without_environment(self, monkeypatch):
        monkeypatch.delenv("APP_ENV")
        assert partition(None).tags == {"env": "development"}

    def test_adds_env_to_caller_tags(self):
        result = partition({"tags": {"key1": "value1", "key2": "value2"}})
        assert result.tags == {"key1": "value1", "key2": "value2", "env": "test"}

    def test_explicit_env_is_kept(self):
        result = partition({"tags": {"key1": "value1", "env": "production"}})
        assert result.tags["env"] == "production"

    def test_reserved_keys_leave_extra(self):
        result = partition(
            {
                "level": "error",
                "tags": "tagsValue",
                "fingerprint": "fingerprintValue",
                "key1": "value1",
                "key2": "value2",
            }
        )
        assert result.extra == {"key1": "value1", "key2": "value2"}
        assert result.fingerprint == "fingerprintValue"
        assert result.level == "error"

    def test_non_mapping_tags_are_ignored(self):
        assert partition({"tags": "tagsValue"}).tags == {"env": "test"}

    def test_fingerprint_and_level_in_dict_only_when_present(self):
        data = partition({"fingerprint": ["a", "b"]}).to_dict()
        assert data["fingerprint"] == ["a", "b"]
        assert "level" not in data

    def test_does_not_mutate_input(self):
        meta = {"tags": {"key1": "value1"}, "fingerprint": "fp", "level": "crit", "k": "v"}
        before = copy.deepcopy(meta)

        result = partition(meta)
        result.tags["added"] = True
        result.extra["added"] = True

        assert meta == before

    def test_resolve_env_prefers_tag(self):
        assert resolve_env({"env": "staging"}) == "staging"
        assert resolve_env({}) == "test"
