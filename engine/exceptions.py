# engine/exceptions.py

class DetectionError(Exception):
    pass


class InvalidArgument(DetectionError, ValueError):
    pass
