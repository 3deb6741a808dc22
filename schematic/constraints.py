"""Constraints that consume path segments during validation."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Mapping, Optional, Sequence

from schematic.modifiers import ModifierFunction
from schematic.parser import SchemaAST


class ValidationError(ValueError):
    """Raised when an input path does not match a schema."""


class VariableStore(ABC):
    """Source of variable values and variable sets used during validation."""

    @abstractmethod
    def get_variable(self, name: str) -> Optional[str]:
        """Return the value of the named variable, or ``None`` if unknown."""

    @abstractmethod
    def get_variable_set(self, name: str) -> Optional[list[str]]:
        """Return the members of the named variable set, or ``None`` if unknown."""


@dataclass
class ValidationContext:
    """Variables and modifier functions available while validating."""

    variable_store: VariableStore
    variable_modifiers: Mapping[str, ModifierFunction] = field(default_factory=dict)


class Constraint(ABC):
    """Consumes leading segments of a path, raising when they do not match."""

    @abstractmethod
    def consume(self, path: Sequence[str], context: ValidationContext) -> list[str]:
        """Return the segments left after this constraint has consumed its share."""

    @property
    def variable_name(self) -> str:
        return ""


def _require_segment(path: Sequence[str]) -> None:
    if not path:
        raise ValidationError("empty path")


@dataclass(frozen=True)
class LiteralConstraint(Constraint):
    literal: str

    def consume(self, path: Sequence[str], context: ValidationContext) -> list[str]:
        _require_segment(path)
        if path[0] != self.literal:
            raise ValidationError(f"expected '{self.literal}', got '{path[0]}'")
        return list(path[1:])

    def __str__(self) -> str:
        return f"LiteralConstraint({self.literal})"


@dataclass(frozen=True)
class WildcardSingleConstraint(Constraint):
    def consume(self, path: Sequence[str], context: ValidationContext) -> list[str]:
        _require_segment(path)
        return list(path[1:])

    def __str__(self) -> str:
        return "WildcardSingleConstraint"


@dataclass(frozen=True)
class WildcardMultiConstraint(Constraint):
    def consume(self, path: Sequence[str], context: ValidationContext) -> list[str]:
        return []

    def __str__(self) -> str:
        return "WildcardMultiConstraint"


@dataclass(frozen=True)
class VariableModifier:
    """A reference to a modifier function and the arguments to call it with."""

    func_name: str
    args: tuple[str, ...] = ()


@dataclass(frozen=True)
class VariableConstraint(Constraint):
    name: str
    modifiers: tuple[VariableModifier, ...] = ()

    @property
    def variable_name(self) -> str:
        return self.name

    def consume(self, path: Sequence[str], context: ValidationContext) -> list[str]:
        _require_segment(path)
        variable = context.variable_store.get_variable(self.name)
        if variable is None:
            raise ValidationError(f"variable '{self.name}' not found in store")

        functions = []
        for modifier in self.modifiers:
            function = context.variable_modifiers.get(modifier.func_name)
            if function is None:
                raise ValidationError(
                    f"modifier '{modifier.func_name}' not found in context modifiers"
                )
            functions.append((modifier, function))

        parts = variable.split("/")
        for modifier, function in functions:
            try:
                parts = list(function(list(parts), list(modifier.args)))
            except Exception as err:
                raise ValidationError(
                    f"modifier '{modifier.func_name}' application failed: {err}"
                ) from err

        if len(path) < len(parts):
            raise ValidationError(f"path too short for variable '{variable}'")
        for index, (segment, expected) in enumerate(zip(path, parts)):
            if segment != expected:
                raise ValidationError(
                    f"invalid variable constraint value at part {index}, variable '{variable}'"
                )
        return list(path[len(parts):])

    def __str__(self) -> str:
        return f"VariableConstraint({self.name})"


@dataclass(frozen=True)
class VariableSetConstraint(Constraint):
    name: str

    @property
    def variable_name(self) -> str:
        return self.name

    def consume(self, path: Sequence[str], context: ValidationContext) -> list[str]:
        _require_segment(path)
        members = context.variable_store.get_variable_set(self.name)
        if members is None:
            raise ValidationError(f"variable '{self.name}' not found in store")
        if not members:
            raise ValidationError(f"variable set '{self.name}' is empty")
        if path[0] not in members:
            raise ValidationError("invalid variable set constraint value")
        return list(path[1:])

    def __str__(self) -> str:
        return f"VariableSetConstraint({self.name})"


def compile_constraints(ast: SchemaAST) -> list[Constraint]:
    """Turn a parsed schema into the constraints that validate it."""
    constraints: list[Constraint] = []
    for part in ast.parts:
        if part.var is not None:
            modifiers: tuple[VariableModifier, ...] = ()
            if part.var.modifier is not None:
                modifiers = (
                    VariableModifier(part.var.modifier.func, tuple(part.var.modifier.args)),
                )
            constraints.append(VariableConstraint(part.var.name, modifiers))
        elif part.wildcard is not None:
            if part.wildcard == "+":
                constraints.append(WildcardSingleConstraint())
            elif part.wildcard == "*":
                constraints.append(WildcardMultiConstraint())
        elif part.var_set is not None:
            constraints.append(VariableSetConstraint(part.var_set.name))
        elif part.literal is not None:
            constraints.append(LiteralConstraint(part.literal))
    return constraints