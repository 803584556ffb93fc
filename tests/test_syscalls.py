import pytest

from xv6sim.syscalls import OpenMode, Syscall


def test_syscall_numbers():
    assert Syscall(1) is Syscall.FORK
    assert Syscall(21) is Syscall.CLOSE
    assert Syscall(23) is Syscall.FGPROC
    assert int(Syscall(23)) == 23


def test_unassigned_number():
    with pytest.raises(ValueError):
        Syscall(22)


def test_syscall_lookup_by_number():
    assert Syscall(15) is Syscall.OPEN


def test_rdonly():
    mode = OpenMode.RDONLY
    assert mode.readable() is True
    assert mode.writable() is False


def test_wronly_create():
    mode = OpenMode(0x201)
    assert mode == OpenMode.WRONLY | OpenMode.CREATE
    assert mode.readable() is False
    assert mode.writable() is True


def test_rdwr():
    mode = OpenMode(0x202)
    assert mode.readable() is True
    assert mode.writable() is True


def test_create_alone_is_read_only():
    mode = OpenMode.CREATE
    assert mode.readable() is True
    assert mode.writable() is False


def test_mode_from_int():
    assert OpenMode(0x202) == OpenMode.RDWR | OpenMode.CREATE