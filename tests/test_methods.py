"""Tests for HTTP method emulation."""

import pytest

from boundform.forms.errors import UnsupportedMethod
from boundform.forms.methods import HttpMethod, MethodPlan, OverrideField, plan_method


class TestPlanMethod:
    def test_get_passes_through(self):
        assert plan_method("GET") == MethodPlan(wire_method=HttpMethod.GET, override_field=None)

    def test_post_passes_through(self):
        plan = plan_method("POST")
        assert plan.wire_method is HttpMethod.POST
        assert plan.override_field is None

    def test_put_is_emulated(self):
        assert plan_method("PUT") == MethodPlan(
            wire_method=HttpMethod.POST,
            override_field=OverrideField(name="_method", value="put"),
        )

    @pytest.mark.parametrize("verb", ["PATCH", "DELETE"])
    def test_other_verbs_are_emulated(self, verb):
        plan = plan_method(verb)
        assert plan.wire_method is HttpMethod.POST
        assert plan.override_field.value == verb.lower()

    def test_case_insensitive(self):
        assert plan_method("delete").override_field.value == "delete"

    def test_accepts_enum(self):
        assert plan_method(HttpMethod.PATCH).override_field.value == "patch"

    def test_custom_field_name(self):
        assert plan_method("PUT", field_name="_verb").override_field.name == "_verb"

    def test_unknown_verb_rejected(self):
        with pytest.raises(UnsupportedMethod) as exc_info:
            plan_method("TRACE")
        assert exc_info.value.method == "TRACE"
