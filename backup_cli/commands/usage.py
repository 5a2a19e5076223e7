from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType


class CommandVariant(Enum):
    CREATE = "create"
    DESCRIBE = "describe"
    PROGRESS = "progress"
    DELETE = "delete"
    CANCEL = "cancel"
    HISTORY = "history"
    SET_ADD = "set add"
    SET_REMOVE = "set remove"
    SET_DELETE = "set delete"
    SET_DESCRIBE = "set describe"
    SET_LIST = "set list"
    HELP = "help"


INCORRECT_USAGE = "Incorrect usage"

USAGE = (
    "Usage: backup COMMAND [command-specific arguments]\n"
    "where COMMAND is one of:\n"
    "  create          Create a new backup image\n"
    "  delete          Delete an existing backup image\n"
    "  describe        Show detailed information of a backup image\n"
    "  history         Show history of all successful backups\n"
    "  progress        Show the progress of the latest backup request\n"
    "  set             Backup set management\n"
    "Run 'backup COMMAND -h' to see help message for each command\n"
)

CREATE_USAGE = (
    "Usage: backup create <type> <backup_root> [tables] [-set name] "
    "[-w workers] [-b bandwidth]\n"
    "  type            \"full\" to create a full backup image\n"
    "                  \"incremental\" to create an incremental backup image\n"
    "  backup_root     Full path to store the backup image\n"
    "Options:\n"
    "  tables          If no tables (\"\") are specified, all tables are backed up.\n"
    "                  Otherwise it is a comma separated list of tables.\n"
    "  -w              Number of parallel workers.\n"
    "  -b              Bandwidth per worker in MB per second.\n"
    "  -set            Name of backup set to use (mutually exclusive with [tables])\n"
)

DESCRIBE_USAGE = (
    "Usage: backup describe <backupId>\n"
    "  backupId        Backup image id\n"
)

PROGRESS_USAGE = (
    "Usage: backup progress [backupId]\n"
    "  backupId        Backup image id. Defaults to the most recent (ongoing) session.\n"
)

DELETE_USAGE = (
    "Usage: backup delete <backupId> [backupId ...]\n"
    "  backupId        Backup image id\n"
)

CANCEL_USAGE = (
    "Usage: backup cancel [backupId]\n"
    "  backupId        Backup image id\n"
)

HISTORY_USAGE = (
    "Usage: backup history [-path BACKUP_ROOT] [-n N] [-t table] [-set name]\n"
    "  -n N            Show up to N last backup sessions, default - 10\n"
    "  -path           Backup root path. If specified, history is read from the\n"
    "                  backup images under this path instead of the catalog.\n"
    "  -t table        Table name. If specified, only backup images which contain\n"
    "                  this table will be listed.\n"
    "  -set name       Backup set name. If specified, only backup images created\n"
    "                  from this set will be listed.\n"
)

SET_USAGE = (
    "Usage: backup set COMMAND [name] [tables]\n"
    "  name            Backup set name\n"
    "  tables          Comma separated list of tables.\n"
    "COMMAND is one of:\n"
    "  add             Add tables to a set, create a set if needed\n"
    "  remove          Remove tables from a set\n"
    "  list            List all backup sets in the system\n"
    "  describe        Describe backup set\n"
    "  delete          Delete backup set\n"
)

USAGE_TEXT: Mapping[CommandVariant, str] = MappingProxyType(
    {
        CommandVariant.CREATE: CREATE_USAGE,
        CommandVariant.DESCRIBE: DESCRIBE_USAGE,
        CommandVariant.PROGRESS: PROGRESS_USAGE,
        CommandVariant.DELETE: DELETE_USAGE,
        CommandVariant.CANCEL: CANCEL_USAGE,
        CommandVariant.HISTORY: HISTORY_USAGE,
        CommandVariant.SET_ADD: SET_USAGE,
        CommandVariant.SET_REMOVE: SET_USAGE,
        CommandVariant.SET_DELETE: SET_USAGE,
        CommandVariant.SET_DESCRIBE: SET_USAGE,
        CommandVariant.SET_LIST: SET_USAGE,
        CommandVariant.HELP: USAGE,
    }
)
