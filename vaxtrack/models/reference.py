# models/reference.py

from pydantic import BaseModel, ConfigDict, Field


class VaccineRequest(BaseModel):
	model_config = ConfigDict(populate_by_name=True)

	name: str | None = None
	description: str | None = None
	doses: int | None = None
	min_age_months: int | None = Field(None, alias="minAgeInMonths")
	max_age_months: int | None = Field(None, alias="maxAgeInMonths")

class VenueRequest(BaseModel):
	name: str | None = None
	contact: str | None = None

class RegionRequest(BaseModel):
	# `villageName` is what older clients send
	model_config = ConfigDict(populate_by_name=True)

	name: str | None = None
	village_name: str | None = Field(None, alias="villageName")
	doctor: str | None = None
	venue: str | None = None

	@property
	def region_name(self) -> str | None:
		return self.name or self.village_name
