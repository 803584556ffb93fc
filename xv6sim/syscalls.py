"""System call numbers and open(2) mode flags."""

from enum import IntEnum, IntFlag


class Syscall(IntEnum):
    FORK = 1
    EXIT = 2
    WAIT = 3
    PIPE = 4
    READ = 5
    KILL = 6
    EXEC = 7
    FSTAT = 8
    CHDIR = 9
    DUP = 10
    GETPID = 11
    SBRK = 12
    SLEEP = 13
    UPTIME = 14
    OPEN = 15
    WRITE = 16
    MKNOD = 17
    UNLINK = 18
    LINK = 19
    MKDIR = 20
    CLOSE = 21
    FGPROC = 23


class OpenMode(IntFlag):
    RDONLY = 0x000
    WRONLY = 0x001
    RDWR = 0x002
    CREATE = 0x200

    def readable(self) -> bool:
        """A file opened with this mode may be read."""
        return not (self & OpenMode.WRONLY)

    def writable(self) -> bool:
        """A file opened with this mode may be written."""
        return bool(self & OpenMode.WRONLY) or bool(self & OpenMode.RDWR)