from errorkit.errors.messages import ErrorKind, Severity

SEVERITY_BY_KIND: dict[str, Severity] = {
    ErrorKind.RUNTIME_FAULT: Severity.ERROR,
    ErrorKind.BACKEND_ERROR: Severity.ERROR,
    ErrorKind.AGGREGATE: Severity.WARNING,
    ErrorKind.NETWORK_ERROR: Severity.ERROR,
    ErrorKind.STRING_ERROR: Severity.INFO,
    ErrorKind.OBJECT_ERROR: Severity.ERROR,
    ErrorKind.UNKNOWN: Severity.ERROR,
}


def severity_for(kind: str) -> Severity:
    """Return the notification severity for a kind.

    Kinds missing from the table, including opaque backend codes, map to
    ``Severity.ERROR``.
    """
    return SEVERITY_BY_KIND.get(kind, Severity.ERROR)
