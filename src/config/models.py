from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class DefaultVersionScheme(str, Enum):
    TEXT = "TEXT"
    TIMESTAMP = "TIMESTAMP"


class BlackDuckSettings(BaseModel):
    url: str | None = None
    api_token: str | None = None
    username: str | None = None
    password: str | None = None
    offline_mode: bool = False
    timeout: int = Field(default=120, ge=1)
    trust_cert: bool = False


class PolarisSettings(BaseModel):
    url: str | None = None
    access_token: str | None = None
    timeout: int = Field(default=120, ge=1)


class PhoneHomeSettings(BaseModel):
    enabled: bool = True


class DetectSettings(BaseModel):
    ignore_connection_failures: bool = False
    test_connection: bool = False
    phone_home: PhoneHomeSettings = Field(default_factory=PhoneHomeSettings)


class ProjectSettings(BaseModel):
    name: str | None = None
    version_name: str | None = None
    detector: str | None = None
    default_version_scheme: DefaultVersionScheme = DefaultVersionScheme.TEXT
    default_version_text: str = "Default Detect Version"
    default_version_timeformat: str = "%Y-%m-%dT%H:%M:%S.%f"


class LoggingSettings(BaseModel):
    level: str = "INFO"


class DetectConfig(BaseModel):
    blackduck: BlackDuckSettings = Field(default_factory=BlackDuckSettings)
    polaris: PolarisSettings = Field(default_factory=PolarisSettings)
    detect: DetectSettings = Field(default_factory=DetectSettings)
    project: ProjectSettings = Field(default_factory=ProjectSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    model_config = ConfigDict(extra="forbid")
