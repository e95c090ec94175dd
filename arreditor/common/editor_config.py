
import logging
import os

from .naming_utils import generate_untitled_name


logger = logging.getLogger(__name__)

CONFIG_FILENAME = "arreditor.cfg"


class EditorConfig:
    """
    Editor settings (arreditor.cfg).
    Plain `Key = Value` lines; paths are relative to the config file.
    """

    def __init__(self, filepath=None):
        self.config_file = filepath
        self.root_dir = os.path.dirname(os.path.abspath(filepath)) if filepath else os.getcwd()

        # Defaults
        self.history_size = 100
        self.backup_dir = ".arr_backups"
        self.untitled_prefix = "new-"

        if filepath and os.path.exists(filepath):
            self.load(filepath)

    @classmethod
    def find(cls, directory=None):
        """Load arreditor.cfg from `directory` (default: cwd), or defaults."""
        path = os.path.join(directory or os.getcwd(), CONFIG_FILENAME)
        return cls(path if os.path.exists(path) else None)

    def load(self, filepath):
        self.config_file = filepath
        self.root_dir = os.path.dirname(os.path.abspath(filepath))

        config = {}
        with open(filepath, 'r', encoding='utf-8') as f:
            for line in f:
                line = line.strip()
                if not line or line.startswith('#'):
                    continue
                if '=' in line:
                    key, val = line.split('=', 1)
                    config[key.strip()] = val.strip()

        if "HistorySize" in config:
            try:
                size = int(config["HistorySize"])
                if size <= 0:
                    raise ValueError("must be positive")
                self.history_size = size
            except ValueError as e:
                logger.warning("Ignoring HistorySize %r in %s: %s", config["HistorySize"], filepath, e)

        self.backup_dir = config.get("BackupDir", self.backup_dir)
        self.untitled_prefix = config.get("UntitledPrefix", self.untitled_prefix)

    def resolve_path(self, relative_path):
        """Get absolute path from a path relative to the config file."""
        return os.path.abspath(os.path.join(self.root_dir, relative_path))

    @property
    def abs_backup_dir(self):
        return self.resolve_path(self.backup_dir)

    def backup_path_for(self, document_path):
        """Where the hot-exit backup of a document goes."""
        name = os.path.basename(document_path) + ".bak"
        return os.path.join(self.abs_backup_dir, name)

    def untitled_name(self, directory):
        """Next free untitled file name inside `directory`."""
        existing = os.listdir(directory) if os.path.isdir(directory) else []
        return generate_untitled_name(existing, prefix=self.untitled_prefix)
