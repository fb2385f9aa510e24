from app import cycle_a


def unwrap(value):
    if isinstance(value, list):
        return cycle_a.wrap(value[0])
    return None
