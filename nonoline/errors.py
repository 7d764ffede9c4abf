"""nonoline 的异常类型。"""


class NonoError(Exception):
    """所有 nonoline 异常的基类。"""


class ConstraintError(NonoError):
    """约束（每段黑块长度列表）本身不合法。"""


class MalformedConstraintError(ConstraintError):
    pass


class OverConstrainedError(ConstraintError):
    def __init__(self, span, length, name=None):
        prefix = f"{name}: " if name else ""
        super().__init__(
            f"{prefix}constraint needs at least {span} cells but the line has {length}"
        )
        self.span = span
        self.length = length


class ParseError(NonoError):
    pass


class InputError(NonoError):
    pass


class InputAborted(NonoError):
    pass


class PlacementLimitError(NonoError):
    def __init__(self, limit):
        super().__init__(f"more than {limit} placements, enumeration stopped")
        self.limit = limit


class LineConflictError(NonoError):
    def __init__(self, index, current, proposed):
        super().__init__(
            f"cell {index} is already {current}, cannot set it to {proposed}"
        )
        self.index = index
        self.current = current
        self.proposed = proposed
