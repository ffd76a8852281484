class ProposalError(Exception):
    """Base class for errors raised by the proposal pipeline."""


class MissingElectricityBillError(ProposalError):
    """A calculation was requested without the required electricity bill."""

    def __init__(self, customer_name: str):
        super().__init__(
            f"An electricity bill is required to calculate a proposal for {customer_name!r}"
        )
        self.customer_name = customer_name


class ReferenceDataError(ProposalError):
    """A reference-data file is missing columns or holds unreadable values."""


class InputDataError(ProposalError):
    """A customer or bill input file could not be parsed."""
