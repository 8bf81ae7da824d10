from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CrisisType(str, Enum):
    """Kind of market crisis applied by the crisis model."""
    NONE = "NONE"
    RISK_OFF = "RISK_OFF"
    RISING_RATES = "RISING_RATES"


class RecoveryType(str, Enum):
    """Shape of the post-shock recovery curve."""
    V_SHAPED = "V_SHAPED"  # fast
    U_SHAPED = "U_SHAPED"  # medium
    L_SHAPED = "L_SHAPED"  # slow


class ScenarioConfig(BaseModel):
    """Scalar parameters for one simulation run.

    Range checks happen here, at construction; the engine trusts whatever
    config it is handed. Instances are frozen, so derive a changed config
    with model_validate on a merged dump rather than mutating.
    """

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
        allow_inf_nan=False,
    )

    initial_amount: float = Field(default=100_000.0, ge=0.0)
    years: int = Field(default=5, ge=1, le=30)
    annual_fees: float = Field(default=0.0, ge=0.0, le=3.0)
    inflation_rate: float = Field(default=2.5, ge=0.0, le=10.0)
    enable_risk: bool = False
    crisis_type: CrisisType = CrisisType.NONE
    drawdown: float = Field(default=0.0, ge=0.0, le=50.0)
    recovery_years: float = Field(default=1.0, ge=1.0, le=30.0)
    recovery_type: RecoveryType = RecoveryType.V_SHAPED
    enable_volatility: bool = False
    volatility_level: float = Field(default=1.0, ge=0.0, le=1.5)
    random_seed_base: int = Field(default=1, ge=1, le=2_147_483_646)

    def with_changes(self, **changes) -> "ScenarioConfig":
        """Return a re-validated copy with the given fields replaced."""
        data = self.model_dump()
        data.update(changes)
        return ScenarioConfig.model_validate(data)
