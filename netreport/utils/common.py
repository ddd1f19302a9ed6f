"""
Centralized paths for netreport.
Single source of truth -- all modules import from here.
"""
import os


def get_real_user_home():
    """Return the real user's home directory, even under sudo.

    nmap and iw are often run with ``sudo``, in which case
    ``os.path.expanduser("~")`` returns ``/root``.  The ``SUDO_USER``
    variable points back at the invoking user.
    """
    sudo_user = os.environ.get("SUDO_USER")
    if sudo_user:
        try:
            import pwd
            return pwd.getpwnam(sudo_user).pw_dir
        except (KeyError, ImportError):
            pass
    return os.path.expanduser("~")


# ── Canonical Paths ──────────────────────────────────────────
CONFIG_DIR = os.path.join(get_real_user_home(), ".config", "netreport")
CONFIG_PATH = os.path.join(CONFIG_DIR, "config.json")
LOG_DIR = os.path.join(CONFIG_DIR, "logs")
