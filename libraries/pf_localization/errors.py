## filter error types


class FilterNotInitializedError(RuntimeError):
    # a stage was called before its inputs exist
    pass


class EmptyMapError(ValueError):
    # weighting against a landmark map with no entries
    pass


class WeightDegeneracyError(ArithmeticError):

    def __init__(self, weight_sum, message=None):
        self.weight_sum = weight_sum
        if message is None:
            message = f"cannot resample, weight sum is {weight_sum!r} (filter diverged)"
        super().__init__(message)
