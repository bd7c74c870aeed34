"""Tests for engineering task generation."""

import pytest

from specflow.generation import assign_phase, generate_base_tasks, generate_tasks, get_template_tasks
from specflow.models import Component, ItemType, Phase, Template


class TestBaseTasks:
    """Test goal-derived tasks."""

    def test_sixteen_baseline_tasks(self):
        """Test the fixed baseline for a goal with no gated keywords."""
        tasks = generate_base_tasks("Add dark mode")

        assert len(tasks) == 16
        assert all(t.type == ItemType.TASK for t in tasks)
        assert tasks[0].title == "Frontend: Design and implement main UI layout for add dark mode"
        assert tasks[5].title == "Backend: Design data models and schema for add dark mode"
        assert tasks[-1].title == "DevOps: Configure staging and production environments"

    def test_baseline_components(self):
        """Test component distribution of the baseline."""
        components = [t.component for t in generate_base_tasks("Add dark mode")]

        assert components.count(Component.FRONTEND) == 5
        assert components.count(Component.BACKEND) == 4
        assert components.count(Component.DESIGN) == 2
        assert components.count(Component.TESTING) == 3
        assert components.count(Component.DEVOPS) == 2

    def test_goal_is_lowercased(self):
        """Test that the goal placeholder uses the lowercased goal."""
        tasks = generate_base_tasks("Search Orders")
        assert tasks[0].title.endswith("for search orders")

    def test_search_pair(self):
        """Test the search gate."""
        tasks = generate_base_tasks("Search orders")

        assert len(tasks) == 18
        assert tasks[16].title == "Frontend: Build search and filter UI with real-time results"
        assert tasks[17].title == "Backend: Implement search indexing and query optimization"

    def test_gated_pairs_in_fixed_order(self):
        """Test that notification, upload and auth pairs follow declaration order."""
        tasks = generate_base_tasks("Email the user at login when an upload fails")
        extra = [t.title for t in tasks[16:]]

        assert extra == [
            "Backend: Implement notification service with email and in-app support",
            "Frontend: Build notification center UI component",
            "Backend: Implement file upload service with validation and storage",
            "Frontend: Build drag-and-drop file upload component",
            "Backend: Implement authentication flow with JWT tokens",
            "Frontend: Build login, registration, and password reset pages",
        ]

    def test_each_pair_added_once(self):
        """Test that several keywords from one gate add a single pair."""
        tasks = generate_base_tasks("Search, filter and query records")
        assert len(tasks) == 18


class TestTemplateTasks:
    """Test template task sets."""

    @pytest.mark.parametrize("template,count", [
        (Template.MOBILE, 8),
        (Template.WEB, 7),
        (Template.INTERNAL, 6),
        (Template.CUSTOM, 0),
    ])
    def test_template_sizes(self, template, count):
        """Test the number of tasks per template."""
        assert len(get_template_tasks(template)) == count

    def test_raw_string_template(self):
        """Test that string values resolve to the enum."""
        assert len(get_template_tasks("mobile")) == 8

    def test_unknown_template_has_no_tasks(self):
        """Test that unrecognized templates add nothing."""
        assert get_template_tasks("enterprise") == []
        assert get_template_tasks(None) == []

    def test_web_tasks(self):
        """Test the first web task."""
        first = get_template_tasks(Template.WEB)[0]
        assert first.title == "Testing: Verify cross-browser compatibility (Chrome, Firefox, Safari, Edge)"
        assert first.component == Component.TESTING

    def test_template_tasks_follow_goal_tasks(self):
        """Test concatenation order."""
        tasks = generate_tasks("Add dark mode", Template.INTERNAL)

        assert len(tasks) == 22
        assert tasks[16].title.startswith("Backend: Implement role-based permission system")


class TestAssignPhase:
    """Test phase scheduling."""

    @pytest.mark.parametrize("component,phase", [
        (Component.TESTING, Phase.TESTING),
        (Component.DEVOPS, Phase.DEPLOYMENT),
        (Component.DESIGN, Phase.PLANNING),
        (Component.FRONTEND, Phase.DEVELOPMENT),
        (Component.BACKEND, Phase.DEVELOPMENT),
    ])
    def test_component_to_phase(self, component, phase):
        """Test the component to phase mapping."""
        assert assign_phase(component) == phase
