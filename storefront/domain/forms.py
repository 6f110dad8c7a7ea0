from collections.abc import Iterable, Mapping, Sequence
from typing import Any, Union

from pydantic import ValidationError

# A submitted form: every field is either one value or several values.
# Starlette's FormData satisfies this too and also exposes getlist().
FormValue = Union[str, Sequence[str]]
FormInput = Mapping[str, FormValue]


def _values(form: FormInput, key: str) -> list[Any]:
    getlist = getattr(form, "getlist", None)
    if getlist is not None:
        return list(getlist(key))
    value = form.get(key)
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def normalize_form(form: FormInput, list_fields: Iterable[str] = ()) -> dict[str, Any]:
    """
    Resolves scalar-or-list form values into the shape the input models expect.

    List fields may be submitted either as repeated 'name[]' entries or as a
    plain 'name' entry holding one value or several; they always come out as
    a list of distinct non-empty strings in submission order, empty when
    absent. Every other field comes out as its last submitted value.

    Args:
        form (FormInput): The submitted form, a plain mapping or a multi-dict.
        list_fields (Iterable[str]): Names of the fields that hold several values.

    Returns:
        dict[str, Any]: One entry per submitted field plus every list field.
    """
    list_fields = set(list_fields)
    data: dict[str, Any] = {}

    for key in dict.fromkeys(form.keys()):
        name = key[:-2] if key.endswith("[]") else key
        if name in list_fields:
            continue
        values = _values(form, key)
        if values:
            data[name] = values[-1]

    for name in list_fields:
        values = _values(form, f"{name}[]") + _values(form, name)
        data[name] = list(dict.fromkeys(v for v in values if isinstance(v, str) and v.strip()))

    return data


def field_errors(exc: ValidationError) -> dict[str, list[str]]:
    """Flattens a pydantic ValidationError into messages keyed by form field."""
    errors: dict[str, list[str]] = {}
    for err in exc.errors():
        field = str(err["loc"][0]) if err["loc"] else "_form"
        message = "Required" if err["type"] == "missing" else err["msg"]
        errors.setdefault(field, []).append(message)
    return errors
