"""Tests for repository credentials."""

from yumrepo.material.base import PASSWORD, USERNAME, ValidationError, ValidationResult
from yumrepo.material.credentials import BOTH_REQUIRED_MESSAGE, Credentials


class TestUserInfo:
    """Tests for userinfo encoding."""

    def test_plain_user_info(self):
        """Test userinfo without reserved characters."""
        assert Credentials("user", "password").user_info() == "user:password"

    def test_password_is_escaped(self):
        """Test reserved characters in the password are percent-encoded."""
        assert Credentials("user", "!password@:").user_info() == "user:%21password%40%3A"

    def test_email_username_is_escaped(self):
        """Test an email address as username."""
        credentials = Credentials("user@example.com", "!password@:")
        assert credentials.user_info() == "user%40example.com:%21password%40%3A"

    def test_no_user_info_without_credentials(self):
        """Test absent credentials produce no userinfo."""
        assert Credentials().user_info() is None
        assert Credentials("user", None).user_info() is None


class TestValidate:
    """Tests for credentials pairing validation."""

    def test_only_password_provided(self):
        """Test the error is keyed on the missing username."""
        result = ValidationResult()
        Credentials(None, "password").validate(result)

        assert result.is_failure
        assert ValidationError(USERNAME, BOTH_REQUIRED_MESSAGE) in result.errors

    def test_only_username_provided(self):
        """Test an empty password counts as missing."""
        result = ValidationResult()
        Credentials("user", "").validate(result)

        assert result.is_failure
        assert ValidationError(PASSWORD, BOTH_REQUIRED_MESSAGE) in result.errors

    def test_both_or_neither_is_valid(self):
        """Test complete and absent credentials pass."""
        for credentials in (Credentials(), Credentials("user", "password"), Credentials("", "")):
            result = ValidationResult()
            credentials.validate(result)
            assert result.is_success

    def test_repr_hides_password(self):
        """Test the password never appears in repr."""
        assert "secret" not in repr(Credentials("user", "secret"))
