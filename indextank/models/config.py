from typing import Literal

from pydantic import BaseModel


class EnvConfig(BaseModel):
    """
    Describes one environment setting a client needs before it can talk to its backend.

    Attributes:
        env_key (str): Key name without the client prefix, e.g. "API_URL" for "SEARCH_INDEXTANK_API_URL".
        val_type (str): How the raw value is read: "string", "number", "bool" or "list".
        default (str | int | float | bool | list | None): Value used when the variable is unset. None marks the key as required.
    """

    env_key: str
    val_type: Literal["string", "number", "bool", "list"] = "string"
    default: str | int | float | bool | list | None = None
