from pydantic import BaseModel, ConfigDict, Field


class CommandResult(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    command: str = Field(min_length=1)
    exit_status: int
    output: str = ""

    @property
    def success(self) -> bool:
        return self.exit_status == 0
