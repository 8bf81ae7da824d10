from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class Asset(BaseModel):
    """A single projected asset.

    annual_return is a percent (7.0 = 7%); volatility is a decimal standard
    deviation of the yearly noise (0.15 = 15%).
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        allow_inf_nan=False,
    )

    annual_return: float = 0.0
    volatility: float = Field(default=0.0, ge=0.0)
    drawdown_impact: float = Field(default=0.0, ge=0.0)
    crisis_sensitivity: float = Field(default=0.0, ge=0.0, le=2.0)
    is_baseline: bool = False
    color: str = "#999999"

    @model_validator(mode="after")
    def _baseline_has_no_parameters(self) -> "Asset":
        if self.is_baseline and any(
            (self.annual_return, self.volatility, self.drawdown_impact, self.crisis_sensitivity)
        ):
            raise ValueError("baseline asset must have all numeric fields fixed at zero")
        return self
