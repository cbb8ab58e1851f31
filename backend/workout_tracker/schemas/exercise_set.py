import uuid
from typing import Annotated
from datetime import datetime
from pydantic import BaseModel, Field, model_validator

NonNegFloat = Annotated[float, Field(ge=0, le=10000)]
NonNegInt = Annotated[int, Field(ge=0, le=1000)]

class SetUpdate(BaseModel):
    weight: NonNegFloat | None = None
    reps: NonNegInt | None = None

    @model_validator(mode="after")
    def something_to_change(self):
        if self.weight is None and self.reps is None:
            raise ValueError("provide weight and/or reps")
        return self

class SetRead(BaseModel):
    id: uuid.UUID
    session_id: uuid.UUID | None = None  # None until the session row is saved
    exercise_id: uuid.UUID | None = None
    set_number: int
    weight: float
    reps: int
    is_completed: bool
    completed_at: datetime | None = None

    model_config = {"from_attributes": True}
