from pydantic import BaseModel


# Result of delete/clear style mutations
class ActionResult(BaseModel):
    success: bool
