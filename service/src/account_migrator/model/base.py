from pydantic import BaseModel, model_validator


class NullAsDefaultModel(BaseModel):
    """Model where a JSON null takes the field's default value.

    Older releases wrote `null` for unset lists, maps and nested objects and
    read it back as the empty value.
    """

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data):
        if data is None:
            return {}
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data
