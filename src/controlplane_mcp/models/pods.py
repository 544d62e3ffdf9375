"""Pod identity used to address a single pod in the cluster."""

from pydantic import BaseModel, ConfigDict, Field


class PodIdentity(BaseModel):
    """Namespace and name of a pod."""

    model_config = ConfigDict(frozen=True)

    namespace: str = Field(min_length=1, description="Pod namespace")
    name: str = Field(min_length=1, description="Pod name")

    def __str__(self) -> str:
        return f"{self.namespace}/{self.name}"
