"""Default locations, markers and commands used by devhost."""

VCS_MARKER = ".git"
DEFAULT_MAX_DEPTH = 20
DEFAULT_DOCUMENT_ROOTS = ("public_html",)
DEFAULT_CONFIG_FILE = ".devhost.yml"
DEFAULT_PACKAGES_DIR = "node_modules"
PACKAGE_MANIFEST = "package.json"

DEFAULT_DATABASE_PREFIX = "wp_"
DATABASE_START_SUCCESS_MARKER = "SUCCESS"
LOOPBACK_ADDRESS = "127.0.0.1"

# Running web-server processes at or below this count means it is not up.
WEB_SERVER_PROCESS_BASELINE = 0

PLATFORM_DEFAULTS = {
    "darwin": {
        "vhosts_file": "/etc/apache2/extra/httpd-vhosts.conf",
        "hosts_file": "/etc/hosts",
        "web_server_process": "httpd",
        "web_server_start_command": ["apachectl", "start"],
        "web_server_restart_command": ["apachectl", "graceful"],
        "dns_flush_commands": [
            ["dscacheutil", "-flushcache"],
            ["killall", "-HUP", "mDNSResponder"],
        ],
        "database_start_command": ["mysql.server", "start"],
        "database_client": "mysql",
        "browser_command": ["open"],
    },
    "linux": {
        "vhosts_file": "/etc/apache2/sites-enabled/devhost.conf",
        "hosts_file": "/etc/hosts",
        "web_server_process": "apache2",
        "web_server_start_command": ["apachectl", "start"],
        "web_server_restart_command": ["apachectl", "graceful"],
        "dns_flush_commands": [["resolvectl", "flush-caches"]],
        "database_start_command": ["service", "mysql", "start"],
        "database_client": "mysql",
        "browser_command": ["xdg-open"],
    },
}
