class TimeTrackerError(Exception):
    """Error base del control de horas; el mensaje se muestra al usuario"""


class ParseError(TimeTrackerError):
    pass


class SerializationError(TimeTrackerError):
    pass
