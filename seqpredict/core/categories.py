from seqpredict.errors import OutOfRangeError

LOW, MID, HIGH = 0, 1, 2
LABELS = ("Low", "Mid", "High")
MIDPOINTS = (1.75, 3.10, 4.40)

LOW_MAX = 2.5
MID_MAX = 3.75


def categorize(x: float) -> int:
    if not (1 <= x <= 5):
        raise OutOfRangeError(f"value {x} out of range (1-5)")
    if x <= LOW_MAX:
        return LOW
    if x <= MID_MAX:
        return MID
    return HIGH


def label_of(state: int) -> str:
    return LABELS[max(LOW, min(HIGH, state))]


def midpoint_of(state: int) -> float:
    return MIDPOINTS[max(LOW, min(HIGH, state))]
