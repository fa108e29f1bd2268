import enum


class AuthenticationType(str, enum.Enum):
    """Strategy used to obtain object store credentials."""

    DEFAULT = "default"
    ENVIRONMENT_VARIABLES = "environment_variables"
    USER_CREDENTIALS_FILE = "user_credentials_file"
    INSTANCE_PROFILE_CREDENTIALS = "instance_profile_credentials"
    ACCESS_KEY = "access_key"
    TEMPORARY_SESSION = "temporary_session"

    def __str__(self) -> str:
        return self.value
