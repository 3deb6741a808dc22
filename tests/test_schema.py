import pytest

from schematic.constraints import ValidationContext, ValidationError, VariableStore
from schematic.parser import SchemaSyntaxError
from schematic.schema import create_schema

SCHEMA = '$gitlab_path.strip_last_prefix("helm-", "ansible-")/$[technologies]/+'


class _TestVariableStore(VariableStore):
    def __init__(self, strings, sets):
        self.strings = strings
        self.sets = sets

    def get_variable(self, name):
        return self.strings.get(name)

    def get_variable_set(self, name):
        return self.sets.get(name)


def _context(gitlab_path, modifiers=None):
    store = _TestVariableStore(
        {"gitlab_path": gitlab_path}, {"technologies": ["postgres", "kafka"]}
    )
    if modifiers is None:
        return ValidationContext(store)
    return ValidationContext(store, modifiers)


def _is_valid(schema, input_path, context):
    try:
        schema.validate(input_path, context)
    except ValidationError:
        return False
    return True


@pytest.mark.parametrize(
    "gitlab_path, input_path, expect_valid",
    [
        (
            "deployment/group1/project1/helm-project1-backend",
            "deployment/group1/project1/project1-backend/postgres/admin",
            True,
        ),
        (
            "deployment/group1/project1/helm-project1-backend",
            "deployment/group1/project1/something-project1-backend/postgres/admin",
            False,
        ),
        (
            "deployment/group1/project1/ansible-project1-backend",
            "deployment/group1/project1/project1-backend/postgres/admin",
            True,
        ),
        (
            "deployment/group1/project1/ansible-project1-backend",
            "deployment/group1/project1/project1-backend/not_allowed/admin",
            False,
        ),
    ],
)
def test_variable_modifiers(gitlab_path, input_path, expect_valid):
    schema = create_schema(SCHEMA)
    assert _is_valid(schema, input_path, _context(gitlab_path)) is expect_valid


@pytest.mark.parametrize(
    "schema_text, gitlab_path, input_path, expect_valid",
    [
        (
            SCHEMA,
            "deployment/group1/project1/helm-project1-backend",
            "deployment/invalid-group1/invalid-project1/project1-backend/postgres/admin",
            False,
        ),
        (
            SCHEMA,
            "deployment/group1/project1/ansible-project1-backend",
            "deployment/group1/project1/project1-backend/postgres/admin",
            True,
        ),
    ],
)
def test_schema_format_valid_schemas(schema_text, gitlab_path, input_path, expect_valid):
    schema = create_schema(schema_text)
    assert _is_valid(schema, input_path, _context(gitlab_path)) is expect_valid


@pytest.mark.parametrize(
    "schema_text",
    [
        '$gitlab_path.strip_last_prefix("helm-", "ansible-")///',
        "///",
        "",
    ],
)
def test_schema_format_invalid_schemas(schema_text):
    with pytest.raises(SchemaSyntaxError):
        create_schema(schema_text)


def test_error_names_input_and_constraint():
    schema = create_schema("a/b")
    with pytest.raises(
        ValidationError,
        match="failed to consume input 'x/b' with constraint 'LiteralConstraint\\(a\\)'",
    ) as info:
        schema.validate("x/b", _context(""))
    assert isinstance(info.value.__cause__, ValidationError)


def test_remaining_segments_rejected():
    schema = create_schema("a")
    with pytest.raises(ValidationError, match="did not fully consume all segments, remaining: \\[b\\]"):
        schema.validate("a/b", _context(""))


def test_surrounding_slashes_are_trimmed():
    schema = create_schema("a/b")
    assert _is_valid(schema, "//a/b/", _context("")) is True


def test_star_consumes_rest():
    schema = create_schema("deployment/*")
    assert _is_valid(schema, "deployment/x/y/z", _context("")) is True


def test_custom_modifier_overrides_builtin():
    schema = create_schema(SCHEMA)
    context = _context(
        "deployment/group1/project1/helm-project1-backend",
        {"strip_last_prefix": lambda parts, args: parts},
    )
    assert _is_valid(
        schema, "deployment/group1/project1/helm-project1-backend/kafka/admin", context
    ) is True
    assert _is_valid(
        schema, "deployment/group1/project1/project1-backend/kafka/admin", context
    ) is False


def test_validate_leaves_context_modifiers_untouched():
    modifiers = {}
    context = _context("deployment/helm-app", modifiers)
    create_schema(SCHEMA).validate("deployment/app/postgres/admin", context)
    assert context.variable_modifiers == {}


def test_schema_str():
    schema = create_schema("a/+")
    assert str(schema) == (
        "AST:\nLiteral:a\nWildcard:+\n\nConstraints:\n"
        "LiteralConstraint(a)\nWildcardSingleConstraint\n"
    )