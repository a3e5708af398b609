"""Base contract enforcement utilities.

The require() function is the single enforcement mechanism for all contracts.
"""

from seascape.contracts.failure import ContractViolation


def require(condition: bool, message: str, error: type = ContractViolation) -> None:
    """Enforce a pipeline contract.

    Called at stage boundaries to verify the preceding stage produced the
    guaranteed invariants. Fail-fast: no recovery, no fallback.

    Parameters
    ----------
    condition : bool
        The invariant that must be true.

    message : str
        Diagnostic naming the file, variable or column at fault.

    error : type, optional
        ContractViolation subclass to raise (default ContractViolation).

    Raises
    ------
    ContractViolation
        If condition is False.

    Examples
    --------
    >>> require("lon" in df.columns, "Matrix contract: missing 'lon' column")
    >>> require(len(df) > 0, "no cells left", EmptyMatrixError)
    """
    if not condition:
        raise error(message)
