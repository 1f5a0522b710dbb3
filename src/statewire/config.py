"""Model configuration."""

from pydantic import BaseModel, ConfigDict, Field


class ModelConfig(BaseModel):
    """Options applied to every instance of one model schema."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    initial_revision: int = Field(
        default=1,
        ge=0,
        description="Revision reported by the first commit",
    )
    tag_instances: bool = Field(
        default=False,
        description=(
            "Pass an 'instance_id' keyword argument to every handler call, so "
            "listeners can tell apart instances created from the same schema"
        ),
    )
    isolate_listener_errors: bool = Field(
        default=False,
        description="Log listener exceptions and keep delivering instead of propagating them",
    )
    positional_set: bool = Field(
        default=True,
        description="Expose the type-unsafe model.set(index, value) writer",
    )
