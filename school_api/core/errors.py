from typing import Dict, List


"""Application error types mapped to HTTP responses in school_api.main. - errors"""


class ValidationFailed(Exception):
    """One or more input fields broke their rules. - validation_failed

    `details` holds one {"field", "msg"} entry per failing rule.
    """

    def __init__(self, details: List[Dict[str, str]]):
        super().__init__("Validation failed")
        self.details = details


class StoreError(Exception):
    """The persistence layer could not complete a query. - store_error"""
