from typing import Dict, List, Optional, Union
from pydantic import BaseModel, Field

FieldErrors = Dict[str, List[str]]

class MutationState(BaseModel):
    """
    What a failed mutation hands back to the form.

    `errors` is only set when validation rejected the input; a storage failure
    carries just the `message`. An empty state means the mutation went through.
    """
    errors: Optional[FieldErrors] = None
    message: Optional[str] = None

    def to_response(self) -> dict:
        return self.model_dump(exclude_none=True)

class Redirect(BaseModel):
    """Successful mutation: the caller should navigate to `path`."""
    path: str = Field(..., description="Dashboard path to navigate to")

# Outcome of create/update actions
ActionOutcome = Union[MutationState, Redirect]
