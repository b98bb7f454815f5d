"""Tests for the constraint catalogue and registry."""

import pytest

from automation_standard.core.errors import (
    ConstraintViolationError,
    ConstructionError,
    InsufficientEnumValuesError,
    UnknownConstraintError,
)
from automation_standard.framework.constraints import (
    BUILTIN_ENTRIES,
    Constraint,
    ConstraintKind,
    ConstraintRegistry,
    boolean,
    constraint_by_name,
    default_registry,
    docker_image,
    enum_of,
    int_maximum,
    int_minimum,
)


@pytest.mark.parametrize(
    ("constraint", "given", "passes"),
    [
        (boolean(), "true", True),
        (boolean(), "false", True),
        (boolean(), "yes", False),
        (boolean(), "", False),
        (enum_of("foo", "bar"), "foo", True),
        (enum_of("foo", "bar"), "bar", True),
        (enum_of("foo", "bar"), "baz", False),
        (Constraint(name="enum", value="foo"), "foo", False),
        (int_minimum(2), "2", True),
        (int_minimum(2), "3", True),
        (int_minimum(2), "1", False),
        (int_minimum(2), "two", False),
        (int_maximum(5), "5", True),
        (int_maximum(5), "4", True),
        (int_maximum(5), "6", False),
        (int_maximum(5), "five", False),
        (docker_image(), "docker.io/nginx:1.2.3", True),
        (docker_image(), "stackrox.io/main:1.2.3", True),
        (docker_image(), "docker.io/nginx", False),
        (docker_image(), "nginx:1.2.3", False),
        (docker_image(), "nginx", False),
    ],
)
def test_builtin_checks(constraint, given, passes):
    """Each built-in kind accepts and rejects the documented inputs."""
    assert constraint.check(given).is_ok() is passes


class TestFailureMessages:
    """Failure reasons are prefixed with the constraint name."""

    def test_int_minimum(self):
        assert str(int_minimum(2).check("1").error) == "int-minimum: input 1 was less than 2"

    def test_int_maximum(self):
        assert str(int_maximum(5).check("6").error) == "int-maximum: input 6 was greater than 5"

    def test_given_not_an_integer(self):
        assert str(int_maximum(5).check("five").error) == "int-maximum: given value was not an integer"

    def test_argument_not_an_integer(self):
        broken = Constraint(name="int-minimum", value="one")
        assert str(broken.check("3").error) == "int-minimum: constraint value was not an integer"

    def test_bool(self):
        assert str(boolean().check("yes").error) == "bool: input yes was not 'true' or 'false'"

    def test_docker_image(self):
        assert str(docker_image().check("nginx").error) == "docker-image: input nginx was not a docker image"

    def test_enum_lists_choices(self):
        error = enum_of("small", "medium", "large").check("huge").error
        assert str(error) == "enum: input huge was not 'small', 'medium' or 'large'"

    def test_enum_with_one_item(self):
        error = Constraint(name="enum", value="only").check("only").error
        assert str(error) == "enum: constraint value did not include at least 2 items"

    def test_violation_records_constraint_and_value(self):
        error = int_minimum(2).check("1").error
        assert isinstance(error, ConstraintViolationError)
        assert error.constraint == "int-minimum"
        assert error.value == "1"


class TestIntegerParsing:
    @pytest.mark.parametrize("given", ["+3", "-0", "007"])
    def test_signed_and_padded_decimals_accepted(self, given):
        assert int_minimum(-1).check(given).is_ok()

    @pytest.mark.parametrize("given", [" 3", "3 ", "1_000", "3.0", "0x10", "٣"])
    def test_non_decimal_forms_rejected(self, given):
        assert int_minimum(0).check(given).is_err()

    def test_large_values(self):
        assert int_maximum(10).check("99999999999999999999").is_err()
        assert int_minimum(0).check("99999999999999999999").is_ok()


class TestDockerImage:
    @pytest.mark.parametrize(
        "given",
        [
            "quay.io/org/team/app:v1.0_rc-2",
            "registry.example.com/app:latest",
            "a-b.c-d/x:y",
        ],
    )
    def test_accepts(self, given):
        assert docker_image().check(given).is_ok()

    @pytest.mark.parametrize(
        "given",
        [
            "Docker.io/nginx:1.2.3",
            "docker.io/nginx:1.2.3\n",
            "localhost/nginx:1.2.3",
            "docker.io/nginx:" + "a" * 129,
            "docker.io//nginx:1",
        ],
    )
    def test_rejects(self, given):
        assert docker_image().check(given).is_err()


class TestConstraintModel:
    def test_str(self):
        assert str(int_maximum(10)) == "int-maximum(10)"
        assert str(boolean()) == "bool"

    def test_empty_value_omitted_when_serialized(self):
        assert boolean().model_dump() == {"name": "bool", "description": "ensure value is a boolean"}
        assert int_minimum(1).model_dump()["value"] == "1"

    def test_frozen(self):
        with pytest.raises(Exception):
            boolean().name = "enum"  # type: ignore[misc]

    def test_factories_fill_descriptions(self):
        assert int_minimum(1).description == "ensure value minimum"
        assert enum_of("a", "b").value == "a,b"

    def test_equal_by_value(self):
        assert int_minimum(1) == int_minimum(1)
        assert int_minimum(1) != int_minimum(2)


class TestConstraintRegistry:
    def test_builtin_catalogue(self):
        registry = ConstraintRegistry.builtin()
        assert registry.names() == ["bool", "docker-image", "enum", "int-maximum", "int-minimum"]
        assert len(registry) == len(ConstraintKind)
        assert "bool" in registry

    def test_default_registry_is_shared(self):
        assert default_registry() is default_registry()

    def test_construct_by_name(self):
        constraint = constraint_by_name("int-maximum", "10")
        assert constraint == int_maximum(10)

    def test_construct_unknown_name_raises(self):
        with pytest.raises(UnknownConstraintError):
            constraint_by_name("int-min", "1")

    def test_construct_enum_needs_two_members(self):
        with pytest.raises(InsufficientEnumValuesError):
            constraint_by_name("enum", "only")
        with pytest.raises(InsufficientEnumValuesError):
            constraint_by_name("enum", "")

    def test_check_unknown_name_is_err(self):
        result = Constraint(name="nope").check("x")
        assert isinstance(result.error, UnknownConstraintError)

    def test_subset_registry(self):
        only_bool = ConstraintRegistry(e for e in BUILTIN_ENTRIES if e.kind is ConstraintKind.BOOL)
        assert "enum" not in only_bool
        assert isinstance(enum_of("a", "b").check("a", only_bool).error, UnknownConstraintError)

    def test_duplicate_entries_rejected(self):
        with pytest.raises(ConstructionError):
            ConstraintRegistry([BUILTIN_ENTRIES[0], BUILTIN_ENTRIES[0]])

    def test_check_all_collects_every_failure(self):
        errors = default_registry().check_all([int_minimum(5), int_maximum(1)], "3")
        assert [str(e) for e in errors] == [
            "int-minimum: input 3 was less than 5",
            "int-maximum: input 3 was greater than 1",
        ]


class TestEnumFactory:
    def test_needs_two_values(self):
        with pytest.raises(InsufficientEnumValuesError):
            enum_of("only")
        with pytest.raises(InsufficientEnumValuesError):
            enum_of()

    def test_rejects_separator_in_value(self):
        with pytest.raises(ConstructionError):
            enum_of("a,b", "c")

    def test_case_sensitive(self):
        assert enum_of("Small", "Large").check("small").is_err()
