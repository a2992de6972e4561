from pydantic import BaseModel, Field, field_validator


class SolverSettings(BaseModel):
    """
    Settings for the MNA solver.

    Attributes:
        pivot_tolerance (float): Smallest absolute pivot accepted by the Gaussian
            elimination before the system is declared singular.
        result_precision (int): Number of decimals used when node voltages are
            printed.
        run_sanity_checks (bool): Run the advisory topology checks before
            assembling the system.
    """
    pivot_tolerance: float = Field(
        default=1e-9,
        description="Smallest absolute pivot accepted during elimination"
    )
    result_precision: int = Field(
        default=3,
        description="Decimals used when printing node voltages"
    )
    run_sanity_checks: bool = Field(
        default=True,
        description="Log topology warnings before assembling the system"
    )

    @field_validator('pivot_tolerance')
    def validate_pivot_tolerance(cls, v):
        """Validate that pivot_tolerance is positive."""
        if v <= 0:
            raise ValueError("pivot_tolerance must be positive")
        return v

    @field_validator('result_precision')
    def validate_result_precision(cls, v):
        """Validate that result_precision is within printable range."""
        if v < 0 or v > 15:
            raise ValueError("result_precision must be between 0 and 15")
        return v
