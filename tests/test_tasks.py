import pytest

from rulerun.core.metrics import InMemoryMetricsSink
from rulerun.core.settings import RuleRunSettings
from rulerun.core.tasks import (
    ListRulesTask,
    MappingResolver,
    RunRuleTask,
    TriggerRuleTask,
    identity,
)
from rulerun.protocol.errors import ValidationError


class TestMappingResolver:
    def test_substitutes_placeholders(self):
        resolver = MappingResolver({"host": "api.example.com", "rule": "r-1"})
        assert resolver("https://${host}") == "https://api.example.com"
        assert resolver("$rule") == "r-1"

    def test_plain_strings_pass_through(self):
        assert MappingResolver({})("rule-123") == "rule-123"
        assert identity("${x}") == "${x}"

    def test_unknown_variable(self):
        with pytest.raises(ValidationError, match="missing"):
            MappingResolver({})("${missing}")

    def test_malformed_template(self):
        with pytest.raises(ValidationError):
            MappingResolver({})("cost: $")


class TestRunRuleTask:
    def test_resolves_before_executing(self, gateway, token):
        gateway.enqueue(200, {"executionId": "exec-1"})
        gateway.enqueue(200, {"status": "COMPLETED"})
        metrics = InMemoryMetricsSink()
        task = RunRuleTask(
            url="https://${host}",
            api_key="${token}",
            rule_id="${rule}",
            polling_interval=1,
            timeout=10,
        )

        result = task.run(
            resolver=MappingResolver({"host": "h.example.com", "token": "t0k", "rule": "r-9"}),
            gateway=gateway,
            metrics=metrics,
            cancel=token,
        )

        assert result.status == "COMPLETED"
        assert gateway.requests[0]["url"] == "https://h.example.com/api/v1/rules/r-9/run"
        assert gateway.requests[0]["headers"]["Authorization"] == "Bearer t0k"
        assert metrics.get("rule_executions", status="COMPLETED", rule_id="r-9") == 1

    def test_api_key_hidden_from_repr(self):
        task = RunRuleTask(url="https://h", api_key="super-secret", rule_id="r")
        assert "super-secret" not in repr(task)

    def test_missing_rule_id(self, gateway, token):
        task = RunRuleTask(url="https://h", api_key="k", rule_id=None)
        with pytest.raises(ValidationError):
            task.run(gateway=gateway, cancel=token)
        assert gateway.requests == []

    def test_bad_polling_values(self, gateway, token):
        task = RunRuleTask(url="https://h", api_key="k", rule_id="r", polling_interval=0)
        with pytest.raises(ValidationError):
            task.run(gateway=gateway, cancel=token)
        assert gateway.requests == []

    def test_from_settings(self):
        settings = RuleRunSettings(url="https://h/", api_key="k", poll_interval=2, timeout=30)
        task = RunRuleTask.from_settings(settings, "rule-4")
        assert task.url == "https://h"
        assert task.api_key == "k"
        assert task.rule_id == "rule-4"
        assert task.polling_interval == 2
        assert task.timeout == 30


class TestListRulesTask:
    def test_none_page_values_fall_back_to_defaults(self, gateway):
        gateway.enqueue(200, {"rules": [], "totalCount": 0})
        task = ListRulesTask(url="https://h", api_key="k", page_size=None, page_number=None)

        listing = task.run(gateway=gateway)

        assert listing.total_count == 0
        assert gateway.requests[0]["url"] == "https://h/api/v1/rules?pageSize=100&pageNumber=1"


class TestTriggerRuleTask:
    def test_run(self, gateway):
        gateway.enqueue(204, "")
        task = TriggerRuleTask(url="${u}", api_key="k", rule_id="r")

        result = task.run(resolver=MappingResolver({"u": "https://h"}), gateway=gateway)

        assert result.rule_id == "r"
        assert gateway.requests[0]["url"] == "https://h/v1/rules/r/execute"
