"""Tests for validators, exceptions and project templates."""

import json
import uuid

import pytest

from app.core.project_templates import TEMPLATES, get_template_files
from app.utils.exceptions import AIServiceError, NotFoundError, ValidationException
from app.utils.validators import is_valid_uuid, parse_uuid


class TestValidators:
    """Tests for project id validation."""

    @pytest.mark.parametrize("value", [str(uuid.uuid4()), str(uuid.uuid1()), "123E4567-E89B-42D3-A456-426614174000"])
    def test_valid(self, value):
        assert is_valid_uuid(value)

    @pytest.mark.parametrize(
        "value",
        [
            "not-a-uuid",
            "",
            None,
            "123e4567-e89b-62d3-a456-426614174000",  # version 6
            "123e4567-e89b-42d3-c456-426614174000",  # bad variant
            "123e4567e89b42d3a456426614174000",
        ],
    )
    def test_invalid(self, value):
        assert not is_valid_uuid(value)

    def test_parse_uuid(self):
        value = uuid.uuid4()
        assert parse_uuid(str(value)) == value

    def test_parse_uuid_raises(self):
        with pytest.raises(ValidationException) as exc_info:
            parse_uuid("nope")
        assert exc_info.value.code == 400
        assert exc_info.value.message == "Invalid project ID format"


class TestExceptions:
    """Exception codes double as HTTP statuses."""

    @pytest.mark.parametrize(
        "error_type, status",
        [("not_configured", 503), ("rate_limited", 429), ("timeout", 504), ("unauthenticated", 500), (None, 500)],
    )
    def test_ai_service_error_status(self, error_type, status):
        assert AIServiceError("x", error_type=error_type).code == status

    def test_not_found(self):
        error = NotFoundError("Project not found", resource_type="project", resource_id="abc")
        assert error.code == 404
        assert error.resource_id == "abc"


class TestProjectTemplates:
    """Tests for starter file sets."""

    def test_react_basic(self):
        files = get_template_files("react-basic")

        assert [f.path for f in files] == ["src/App.tsx", "package.json", "src/index.tsx", "src/index.css"]
        package = json.loads(files[1].content)
        assert package["dependencies"]["react"] == "^18.2.0"

    def test_dashboard(self):
        files = get_template_files("dashboard")

        assert len(files) == 1
        assert files[0].type == "typescript"
        assert "Dashboard" in files[0].content

    def test_unknown_template(self):
        assert get_template_files("vue") == []

    def test_returns_copy(self):
        get_template_files("dashboard").clear()
        assert len(TEMPLATES["dashboard"]) == 1
