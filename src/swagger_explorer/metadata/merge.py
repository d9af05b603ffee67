"""Merge rules for metadata fragments recorded against the same target.

- Scalars: the later fragment wins when it sets the field (not None).
- Lists (tags, parameters, security, required): concatenated in order.
- Maps (responses, properties, security schemes): merged by key; an
  existing entry is shallow-merged with the later one.
"""

from pydantic import BaseModel

from .base import ModelMeta, OperationMeta

OPERATION_SCALARS = ("summary", "description", "operation_id", "deprecated", "request_body")
MODEL_SCALARS = ("title", "description", "example")


def merge_fields(fragment: BaseModel, fields) -> dict:
    """Collect the fields of `fragment` that are set, for a model_copy update."""
    return {name: getattr(fragment, name) for name in fields if getattr(fragment, name) is not None}


def merge_shallow(base: BaseModel, fragment: BaseModel) -> BaseModel:
    """Shallow field merge of two records; a different record type replaces."""
    if type(base) is not type(fragment):
        return fragment
    return base.model_copy(update=merge_fields(fragment, type(fragment).model_fields))


def merge_map(base: dict, fragment: dict) -> dict:
    merged = dict(base)
    for key, value in fragment.items():
        merged[key] = merge_shallow(merged[key], value) if key in merged else value
    return merged


def merge_operation(base: OperationMeta, fragment: OperationMeta) -> OperationMeta:
    """Merge an operation fragment into `base`.

    Used both for successive annotations on one target and for combining
    group-level metadata (base) with endpoint-level metadata (fragment).
    """
    update = merge_fields(fragment, OPERATION_SCALARS)
    update["tags"] = [*base.tags, *fragment.tags]
    update["parameters"] = [*base.parameters, *fragment.parameters]
    update["security"] = [*base.security, *fragment.security]
    update["responses"] = merge_map(base.responses, fragment.responses)
    # Re-registering a scheme name overwrites its definition.
    update["security_schemes"] = {**base.security_schemes, **fragment.security_schemes}
    return base.model_copy(update=update)


def merge_model(base: ModelMeta, fragment: ModelMeta) -> ModelMeta:
    update = merge_fields(fragment, MODEL_SCALARS)
    update["properties"] = merge_map(base.properties, fragment.properties)
    update["required"] = list(dict.fromkeys([*base.required, *fragment.required]))
    return base.model_copy(update=update)


MERGERS = {
    OperationMeta: merge_operation,
    ModelMeta: merge_model,
}


def merge_records(base, fragment):
    """Merge two records of the same type; None stands for an empty record."""
    if base is None:
        return fragment
    return MERGERS[type(fragment)](base, fragment)
