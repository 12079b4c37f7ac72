from pydantic import BaseModel, ConfigDict, Field


class SSHConfig(BaseModel):
    model_config = ConfigDict(extra="ignore")

    host: str = Field(min_length=1)
    port: int = Field(default=22, ge=1, le=65535)
    username: str = Field(min_length=1)
    private_key_path: str = Field(min_length=1)
    key_passphrase: str | None = None
    strict_host_key_checking: bool = True
    timeout: float = Field(default=30.0, gt=0)
