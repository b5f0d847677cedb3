import pytest

from idgate.domain.value_objects.oauth_claims import OAuthClaims


class TestOAuthClaims:
    def test_derives_username_and_email(self):
        claims = OAuthClaims(subject="jdoe", issuer="idp.example.com", signing_algorithm="HS256")

        assert claims.username == "jdoe"
        assert claims.email == "jdoe@idp.example.com"

    @pytest.mark.parametrize("subject,issuer", [("", "idp"), ("jdoe", ""), ("  ", "idp")])
    def test_blank_subject_or_issuer_is_rejected(self, subject, issuer):
        with pytest.raises(ValueError):
            OAuthClaims(subject=subject, issuer=issuer, signing_algorithm="HS256")
