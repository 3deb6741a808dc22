# schematic

`schematic` checks slash-separated paths, such as secret-store paths, against
a short schema. A schema can refer to values that come from a variable store,
so one schema can hold for many projects.

## Schema language

A schema is a list of parts separated by `/`. Each part is one of these:

| Part                        | Matches                                                      |
|-----------------------------|--------------------------------------------------------------|
| `name`                      | exactly the segment `name`                                   |
| `+`                         | any single segment                                           |
| `*`                         | everything that is left                                      |
| `$var`                      | the segments of the variable `var`, split on `/`             |
| `$var.func("a", "b")`       | the variable after the modifier `func` has been applied      |
| `$[set]`                    | one segment that is a member of the variable set `set`       |

A modifier takes one or more double-quoted string arguments, separated by
commas. There is one built-in modifier, `strip_last_prefix`. It removes the
first of its arguments that is a prefix of the last segment of the variable.

For example, the schema

```
$gitlab_path.strip_last_prefix("helm-", "ansible-")/$[technologies]/+
```

with `gitlab_path` set to `deployment/group1/project1/helm-project1-backend`
and `technologies` set to `postgres` and `kafka` accepts
`deployment/group1/project1/project1-backend/postgres/admin` and rejects
`deployment/group1/project1/project1-backend/not_allowed/admin`.

## Using it from Python

Values come from a `schematic.constraints.VariableStore`. Subclass it and
implement `get_variable` and `get_variable_set`; each returns `None` for a
name it does not know.

```python
from schematic.constraints import ValidationContext, ValidationError, VariableStore
from schematic.schema import create_schema


class Store(VariableStore):
    def get_variable(self, name):
        return {"gitlab_path": "deployment/group1/project1/helm-project1-backend"}.get(name)

    def get_variable_set(self, name):
        return {"technologies": ["postgres", "kafka"]}.get(name)


schema = create_schema('$gitlab_path.strip_last_prefix("helm-", "ansible-")/$[technologies]/+')
context = ValidationContext(variable_store=Store())

schema.validate("deployment/group1/project1/project1-backend/postgres/admin", context)

try:
    schema.validate("deployment/group1/project1/project1-backend/redis/admin", context)
except ValidationError as exc:
    print(f"rejected: {exc}")
```

A schema that cannot be parsed raises `schematic.parser.SchemaSyntaxError`
from `create_schema`. A path that does not match raises
`schematic.constraints.ValidationError` from `Schema.validate`. Leading and
trailing slashes of the path are ignored; every segment must be consumed.

`str(schema)` lists the parsed parts and the constraints compiled from them,
which helps when a schema does not behave as expected. The pieces can also be
used on their own: `schematic.parser.parse_schema` returns a `SchemaAST`, and
`schematic.constraints.compile_constraints` turns it into constraints.

## Custom modifiers

Your own modifiers can be passed in `ValidationContext.variable_modifiers`, a
mapping from name to function, next to the built-in ones; a custom modifier
with the same name as a built-in one replaces it. A modifier is a function
that takes the variable's segments and the schema's string arguments and
returns the new segments. To reject its input it raises an exception, such as
`schematic.modifiers.ModifierError`; validation then fails with a
`ValidationError`. A schema that names a modifier the context does not have
also fails validation.

## What it does not do

This is a library only. It installs no command, and it does not read
configuration files or environment variables: the caller compiles the schema
text and supplies the variable store.

## Running the tests

```
pip install -e ".[test]"
pytest
```