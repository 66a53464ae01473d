from typing import Optional


class HuntSplitError(Exception):
    pass


class HuntNotFoundError(HuntSplitError):
    def __init__(self, code: str, reporter: Optional[str] = None):
        self.code = code
        self.reporter = reporter
        if reporter is None:
            msg = f"Unable to find hunt with code {code}"
        else:
            msg = f"Unable to find hunt with code {code} and reporter {reporter}"
        super().__init__(msg)


class InvalidAmount(HuntSplitError, ValueError):
    def __init__(self, amount: object):
        self.amount = amount
        super().__init__(f"Invalid expense amount: {amount!r}")


class InvalidSessionReport(HuntSplitError, ValueError):
    pass


class EmptyExpenseSet(HuntSplitError):
    def __init__(self):
        super().__init__("Cannot allocate loot over an empty expense set")


class ReporterMismatch(HuntSplitError):
    def __init__(self, reporter: str):
        self.reporter = reporter
        super().__init__(f"No calculated balance for reporter {reporter}")


class StaleHuntError(HuntSplitError):
    def __init__(self, code: str, revision: int):
        self.code = code
        self.revision = revision
        super().__init__(f"Hunt {code} changed since revision {revision}")


class HuntCodeConflict(StaleHuntError):
    def __init__(self, code: str):
        super().__init__(code, 0)
        self.args = (f"Hunt code {code} is already in use",)


class CodeGenerationError(HuntSplitError):
    pass
