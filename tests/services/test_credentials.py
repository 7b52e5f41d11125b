import pytest

from devhost.errors import MalformedConfigurationError, UnknownProjectTypeError
from devhost.models import DatabaseCredentials, ProjectType
from devhost.services.credentials import extract

WP_CONFIG = """<?php
/** The name of the database for WordPress */
define( 'DB_NAME', 'wordpress' );
define( 'DB_USER', 'bob' );
define( 'DB_PASSWORD', 'secret' );
define("DB_HOST", "localhost");
define( 'DB_CHARSET', 'utf8mb4' );
"""

PORTAL_CONFIG = """<?php
$db_host = '127.0.0.1:8889';
$db_user = "portal";
$db_pass = 'p@ss;word';
$db_name = 'portal';
"""


def test_extract_wordpress_credentials(tmp_path):
    (tmp_path / "wp-config.php").write_text(WP_CONFIG, encoding="utf-8")

    creds = extract(ProjectType.WORDPRESS, tmp_path)

    assert creds == DatabaseCredentials(username="bob", password="secret", host="localhost")


def test_extract_portal_credentials(tmp_path):
    (tmp_path / "config.php").write_text(PORTAL_CONFIG, encoding="utf-8")

    creds = extract(ProjectType.PORTAL, tmp_path)

    assert creds.username == "portal"
    assert creds.password == "p@ss;word"
    assert creds.host == "127.0.0.1:8889"


def test_extract_keeps_values_verbatim(tmp_path):
    config = WP_CONFIG.replace("'secret'", "' s3cr\"et '")
    (tmp_path / "wp-config.php").write_text(config, encoding="utf-8")

    assert extract(ProjectType.WORDPRESS, tmp_path).password == ' s3cr"et '


def test_extract_allows_empty_password(tmp_path):
    config = WP_CONFIG.replace("'secret'", "''")
    (tmp_path / "wp-config.php").write_text(config, encoding="utf-8")

    assert extract(ProjectType.WORDPRESS, tmp_path).password == ""


def test_extract_rejects_missing_field(tmp_path):
    config = WP_CONFIG.replace("define( 'DB_PASSWORD', 'secret' );\n", "")
    (tmp_path / "wp-config.php").write_text(config, encoding="utf-8")

    with pytest.raises(MalformedConfigurationError, match="password"):
        extract(ProjectType.WORDPRESS, tmp_path)


def test_extract_rejects_duplicate_field(tmp_path):
    config = WP_CONFIG + "define( 'DB_HOST', 'db.example' );\n"
    (tmp_path / "wp-config.php").write_text(config, encoding="utf-8")

    with pytest.raises(MalformedConfigurationError, match="found 2"):
        extract(ProjectType.WORDPRESS, tmp_path)


def test_extract_missing_config_file_is_malformed(tmp_path):
    with pytest.raises(MalformedConfigurationError, match="Could not read"):
        extract(ProjectType.PORTAL, tmp_path)


def test_extract_unknown_type_raises(tmp_path):
    with pytest.raises(UnknownProjectTypeError):
        extract(ProjectType.UNKNOWN, tmp_path)


def test_credentials_repr_hides_password():
    creds = DatabaseCredentials(username="bob", password="secret", host="localhost")

    assert "secret" not in repr(creds)
