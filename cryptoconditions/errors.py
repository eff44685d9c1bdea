"""
All the exceptions raised when decoding conditions and fulfillments.
"""


class ConditionDecodeError(ValueError):
    """Error while decoding a condition or a fulfillment from its binary representation"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message: str = message
