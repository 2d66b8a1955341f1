class RequestIdFilter:
    """
    Fill the structured fields used by the log format.
    Records logged outside a request get '-' placeholders.
    """

    FIELDS = ("request_id", "user", "provider", "model")

    def filter(self, record):
        for field in self.FIELDS:
            if not hasattr(record, field):
                setattr(record, field, "-")
        return True
