"""Shared pydantic base for every Seascape configuration model."""

from pydantic import BaseModel, ConfigDict


class SeascapeBaseModel(BaseModel):
    """Strict by default.

    Unknown keys are errors (UserConfig relaxes this for legacy files),
    assignments are re-validated and string values are stripped.
    """

    model_config = ConfigDict(
        extra='forbid',
        validate_assignment=True,
        use_enum_values=True,
        str_strip_whitespace=True,
    )
