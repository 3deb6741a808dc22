"""Compiled schemas and validation of paths against them."""

from __future__ import annotations

from dataclasses import dataclass

from schematic.constraints import (
    Constraint,
    ValidationContext,
    ValidationError,
    compile_constraints,
)
from schematic.modifiers import predefined_modifiers
from schematic.parser import SchemaAST, parse_schema


@dataclass
class Schema:
    """A parsed schema together with the constraints compiled from it."""

    constraints: list[Constraint]
    ast: SchemaAST

    def validate(self, input: str, context: ValidationContext) -> None:
        """Check ``input`` against the schema, raising :class:`ValidationError` on mismatch."""
        modifiers = predefined_modifiers()
        modifiers.update(context.variable_modifiers or {})
        merged = ValidationContext(context.variable_store, modifiers)

        segments = input.strip("/").split("/")
        for constraint in self.constraints:
            try:
                segments = constraint.consume(segments, merged)
            except ValidationError as err:
                raise ValidationError(
                    f"failed to consume input '{input}' with constraint '{constraint}': {err}"
                ) from err

        if segments:
            remaining = "[" + " ".join(segments) + "]"
            raise ValidationError(
                f"input '{input}' did not fully consume all segments, remaining: {remaining}"
            )

    def __str__(self) -> str:
        constraints = "".join(f"{constraint}\n" for constraint in self.constraints)
        return f"AST:\n{self.ast}\n\nConstraints:\n{constraints}"


def create_schema(text: str) -> Schema:
    """Parse and compile schema text."""
    ast = parse_schema(text)
    return Schema(compile_constraints(ast), ast)