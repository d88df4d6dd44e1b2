import math

CLAMP = 20.0


def sigmoid(x: float) -> float:
    if x > CLAMP:
        return 1.0
    if x < -CLAMP:
        return 0.0
    return 1.0 / (1.0 + math.exp(-x))


def tanh(x: float) -> float:
    if x > CLAMP:
        return 1.0
    if x < -CLAMP:
        return -1.0
    return math.tanh(x)
