"""System prompt used when the config file does not set one."""

DEFAULT_PROMPT = (
    "You are a helpful assistant that uses information such as the path to a "
    "file to provide information on the file such as what programs its used with."
)
