"""Tests for authentication strategies."""

import pytest
import requests
from requests.auth import HTTPBasicAuth

from basichttp import (
    AuthenticationError,
    BasicAuthentication,
    BearerAuthentication,
    ClientCertificateAuthentication,
    Connection,
    HttpsTransport,
    Request,
)
from basichttp.authentication import HTTPBearerAuth


@pytest.fixture
def connection():
    with Connection() as handle:
        yield handle


class TestBasicAuthentication:
    """Tests for BasicAuthentication."""

    def test_configure_sets_requests_auth(self, connection):
        BasicAuthentication("user", "secret").configure(connection)
        assert connection.auth == HTTPBasicAuth("user", "secret")

    def test_requires_username(self):
        with pytest.raises(AuthenticationError):
            BasicAuthentication("", "secret").validate(Request())

    def test_validate_returns_self(self):
        auth = BasicAuthentication("user", "secret")
        assert auth.validate(Request()) is auth

    def test_value_equality(self):
        assert BasicAuthentication("user", "a") == BasicAuthentication("user", "a")
        assert BasicAuthentication("user", "a") != BasicAuthentication("user", "b")

    def test_password_not_in_repr(self):
        assert "secret" not in repr(BasicAuthentication("user", "secret"))


class TestBearerAuthentication:
    """Tests for BearerAuthentication."""

    def test_configure_replaces_earlier_auth(self, connection):
        connection.auth = HTTPBasicAuth("user", "secret")
        BearerAuthentication("abc").configure(connection)

        assert connection.auth == HTTPBearerAuth("abc")
        assert "Authorization" not in connection.headers

    def test_bearer_auth_sets_header(self):
        prepared = requests.Request("GET", "http://example.com/", auth=HTTPBearerAuth("abc")).prepare()
        assert prepared.headers["Authorization"] == "Bearer abc"

    def test_requires_token(self):
        with pytest.raises(AuthenticationError):
            BearerAuthentication("").validate(Request())

    def test_different_types_are_not_equal(self):
        assert BearerAuthentication("user") != BasicAuthentication("user")


class TestClientCertificateAuthentication:
    """Tests for ClientCertificateAuthentication."""

    @pytest.fixture
    def cert_files(self, tmp_path):
        cert = tmp_path / "client.crt"
        key = tmp_path / "client.key"
        cert.write_text("CERT")
        key.write_text("KEY")
        return str(cert), str(key)

    def test_requires_https_transport(self, cert_files):
        auth = ClientCertificateAuthentication(*cert_files)

        with pytest.raises(AuthenticationError, match="HttpsTransport"):
            auth.validate(Request())

    def test_requires_existing_files(self, tmp_path):
        request = Request()
        request.transport = HttpsTransport()

        with pytest.raises(AuthenticationError, match="not found"):
            ClientCertificateAuthentication(str(tmp_path / "missing.crt")).validate(request)

    def test_validate_and_configure(self, cert_files, connection):
        request = Request()
        request.transport = HttpsTransport()
        auth = ClientCertificateAuthentication(*cert_files)

        auth.validate(request).configure(connection)

        assert connection.cert == cert_files

    def test_certificate_only(self, cert_files, connection):
        ClientCertificateAuthentication(cert_files[0]).configure(connection)
        assert connection.cert == cert_files[0]
