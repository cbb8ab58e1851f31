from pydantic import BaseModel, PositiveFloat, PositiveInt, model_validator

class PreferencesRead(BaseModel):
    rest_timer_duration: int
    weight_increment: float

    model_config = {"from_attributes": True}

class PreferencesUpdate(BaseModel):
    rest_timer_duration: PositiveInt | None = None
    weight_increment: PositiveFloat | None = None

    @model_validator(mode="after")
    def something_to_change(self):
        if self.rest_timer_duration is None and self.weight_increment is None:
            raise ValueError("provide rest_timer_duration and/or weight_increment")
        return self
