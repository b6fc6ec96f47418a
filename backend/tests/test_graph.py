"""
Tests for the template model, graph construction and dependency graph formatting.
"""
import pytest
from pydantic import ValidationError

from backend.app.schedule.models import ScheduleTemplate
from backend.app.schedule.templates import PROJECT_TYPES, SCHEDULE_TEMPLATES, get_template
from backend.tools.schedule.engine import build_activity_graph, format_dependency_graph, topological_order


def _template_dict(activities, work_packages=None):
    return {
        "project_type": "test",
        "phases": [{
            "id": "p",
            "title": "P",
            "work_packages": work_packages if work_packages is not None else [
                {"id": "wp", "title": "WP", "activities": activities}
            ],
        }],
    }


class TestTemplateValidation:

    def test_duplicate_activity_ids_rejected(self):
        rows = [
            {"id": "A", "name": "A", "nominal_duration": 1},
            {"id": "A", "name": "A again", "nominal_duration": 1},
        ]
        with pytest.raises(ValidationError) as exc_info:
            ScheduleTemplate.model_validate(_template_dict(rows))
        assert "duplicate activity id 'A'" in str(exc_info.value)

    @pytest.mark.parametrize("duration", [0, -2])
    def test_non_positive_duration_rejected(self, duration):
        rows = [{"id": "A", "name": "A", "nominal_duration": duration}]
        with pytest.raises(ValidationError):
            ScheduleTemplate.model_validate(_template_dict(rows))

    def test_empty_work_package_rejected(self):
        with pytest.raises(ValidationError):
            ScheduleTemplate.model_validate(_template_dict([]))

    def test_empty_phase_rejected(self):
        with pytest.raises(ValidationError):
            ScheduleTemplate.model_validate(_template_dict(None, work_packages=[]))

    def test_templates_are_frozen(self):
        template = get_template("new-build")
        with pytest.raises(ValidationError):
            template.project_type = "changed"


class TestBuiltInTemplates:

    def test_all_types_present(self):
        assert set(SCHEDULE_TEMPLATES) == set(PROJECT_TYPES) == {"new-build", "fit-out", "refurbishment"}

    @pytest.mark.parametrize("project_type,count", [("new-build", 51), ("fit-out", 29), ("refurbishment", 41)])
    def test_activity_counts(self, project_type, count):
        assert len(list(get_template(project_type).iter_activities())) == count

    @pytest.mark.parametrize("project_type", PROJECT_TYPES)
    def test_no_unknown_dependencies(self, project_type):
        graph = build_activity_graph(get_template(project_type))
        assert graph.unknown == {}

    def test_unknown_type_falls_back(self):
        assert get_template("castle") is SCHEDULE_TEMPLATES["new-build"]
        assert get_template(None) is SCHEDULE_TEMPLATES["new-build"]

    def test_fallback_honours_default(self):
        assert get_template("castle", default="fit-out") is SCHEDULE_TEMPLATES["fit-out"]
        assert get_template("castle", default="bogus") is SCHEDULE_TEMPLATES["new-build"]


class TestActivityGraph:

    def test_adjacency(self, diamond_template):
        graph = build_activity_graph(diamond_template)
        assert len(graph) == 5
        assert graph.ids(graph.succs[graph.index["A"]]) == ["B", "C", "E"]
        assert graph.ids(graph.preds[graph.index["D"]]) == ["B", "C"]

    def test_repeated_dependency_collapses(self, template_factory):
        graph = build_activity_graph(template_factory([("A", 1, []), ("B", 1, ["A", "A"])]))
        assert graph.preds[1] == [0]
        assert graph.succs[0] == [1]

    def test_unknown_dependencies_recorded(self, template_factory):
        graph = build_activity_graph(template_factory([("A", 1, ["X", "Y"])]))
        assert graph.unknown == {"A": ["X", "Y"]}
        assert graph.preds[0] == []

    def test_topological_order_is_stable(self, template_factory):
        template = template_factory([("C", 1, ["B"]), ("A", 1, []), ("B", 1, ["A"]), ("D", 1, [])])
        graph = build_activity_graph(template)
        assert graph.ids(topological_order(graph)) == ["A", "B", "C", "D"]

    def test_declared_order_kept_when_valid(self, diamond_template):
        graph = build_activity_graph(diamond_template)
        assert graph.ids(topological_order(graph)) == ["A", "B", "C", "D", "E"]


class TestFormatDependencyGraph:

    def test_lists_nodes_and_edges(self, diamond_template):
        text = format_dependency_graph(diamond_template)
        assert text.splitlines()[0] == "Dependency Graph for test template"
        assert " - D Activity D: 1 [milestone]" in text
        assert " - A -> B" in text
        assert " - C -> D" in text

    def test_unknown_dependency_listed(self, template_factory):
        text = format_dependency_graph(template_factory([("A", 1, ["X"])]))
        assert " - (no dependencies declared)" in text
        assert " - X -> A (unknown activity)" in text
