#models/rating.py
from pydantic import BaseModel, ConfigDict, Field, StrictInt


class RatingRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # strict: JSON true/false or "5" must not be coerced into an id or a star count
    store_id: StrictInt = Field(..., alias="storeId")
    # range is checked by the rating service so the error reads like the other rules
    rating: StrictInt
