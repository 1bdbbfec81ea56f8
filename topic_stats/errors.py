"""Topic data error kinds."""


class TopicDataError(Exception):
    """Base error for topic data access. Wraps filesystem failures."""

    @staticmethod
    def no_such_topic(topic_id: str) -> "NoSuchTopicError":
        """Error raised when the requested topic does not exist."""
        return NoSuchTopicError(topic_id, f"Topic '{topic_id}' not found.")

    @staticmethod
    def missing_topic_data(topic_id: str) -> "MissingTopicDataError":
        """Error raised when the topic has no usable run history."""
        return MissingTopicDataError(topic_id, f"No run data for topic '{topic_id}'.")


class NoSuchTopicError(TopicDataError):
    """Requested topic has no directory under the root folder."""

    def __init__(self, topic_id: str, message: str):
        super().__init__(message)
        self.topic_id = topic_id


class MissingTopicDataError(TopicDataError):
    """Topic exists but has no history runs (or no parseable offsets)."""

    def __init__(self, topic_id: str, message: str):
        super().__init__(message)
        self.topic_id = topic_id
