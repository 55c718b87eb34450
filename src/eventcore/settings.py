from pydantic import BaseModel, ConfigDict, Field


# --- Settings Models ---
class DispatcherSettings(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    allow_duplicates: bool = True  # same listener may be registered twice under one name
    suppress_listener_errors: bool = False  # log and continue instead of re-raising
    trace_dispatch: bool = False  # TRACE log line per listener call


class LoggingSettings(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    debug_mode: bool = True
    log_dir: str = "logs"
    file_logging: bool = False


class AppConfig(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    dispatcher: DispatcherSettings = Field(default_factory=DispatcherSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
