# What it does: Reads the object database, turning loose object files back into blobs, trees and commits
# How it does: `read_object` finds the object file by its hash and hands it to `decode_object`, which inflates it lazily, parses the `<type> <size>` header and dispatches on the type.
# Each decoder collects into a local list and returns a frozen dataclass, so nothing a caller gets back can change afterwards
# What data structure it uses: Hash Table / Dictionary (the object store is content-addressed by SHA-1), Tagged Union (Blob | Tree | Commit), Lists as write-once accumulators

import logging
import os
import re
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import ClassVar

from . import repository
from .errors import (
    DecodeError, InvalidObjectId, MalformedCommitHeader, MalformedObjectHeader,
    MalformedTreeEntry, ObjectNotFound, ObjectReadError, UnknownObjectType,
)
from .inflate import InflatedStream

logger = logging.getLogger(__name__)

OBJECT_TYPES = ('blob', 'tree', 'commit')
DIR_MODE = '40000'
RAW_ID_LENGTH = 20

_OBJECT_ID_RE = re.compile(r'[0-9a-f]{40}')
_UTC_OFFSET_RE = re.compile(r'^([+-])(\d{2}):?(\d{2})$')


def hex_id(raw): # Converts 20 raw id bytes into the 40 character lowercase form
    return raw.hex()


def is_object_id(value):
    return bool(_OBJECT_ID_RE.fullmatch(value))


@dataclass(frozen=True)
class Blob:
    lines: tuple = ()

    type: ClassVar[str] = 'blob'


@dataclass(frozen=True)
class TreeEntry:
    mode: str
    name: str
    id: str

    @property
    def is_dir(self):
        return self.mode == DIR_MODE


@dataclass(frozen=True)
class Tree:
    entries: tuple = ()

    type: ClassVar[str] = 'tree'


@dataclass(frozen=True)
class UserAction:
    name: str = ''
    email: str = ''
    timestamp: str = ''


@dataclass(frozen=True)
class Commit:
    id: str
    tree: str = ''
    parents: tuple = ()
    author: UserAction = field(default_factory=UserAction)
    committer: UserAction = field(default_factory=UserAction)
    message: tuple = ()

    type: ClassVar[str] = 'commit'


def format_email(email): # Strips one leading '<' and one trailing '>'
    if email.startswith('<'):
        email = email[1:]
    if email.endswith('>'):
        email = email[:-1]
    return email


def format_timestamp(epoch, utc_offset):
    """
    Renders a unix epoch and a UTC offset (`+0200` or `+02:00`) as
    `yyyy-MM-dd HH:mm:ss +02:00` in that offset. A zero offset is shown as `Z`.
    """
    match = _UTC_OFFSET_RE.match(utc_offset)
    if not match:
        raise MalformedCommitHeader(f"Invalid UTC offset: '{utc_offset}'")
    sign, hours, minutes = match.group(1), int(match.group(2)), int(match.group(3))
    if hours > 18 or minutes > 59:
        raise MalformedCommitHeader(f"UTC offset out of range: '{utc_offset}'")

    delta = timedelta(hours=hours, minutes=minutes)
    if sign == '-':
        delta = -delta

    try:
        moment = datetime.fromtimestamp(int(epoch), timezone(delta))
    except ValueError as e:
        raise MalformedCommitHeader(f"Invalid timestamp: '{epoch}'") from e
    except (OverflowError, OSError) as e:
        raise MalformedCommitHeader(f"Timestamp out of range: '{epoch}'") from e

    offset = 'Z' if not delta else f"{sign}{hours:02d}:{minutes:02d}"
    return f"{moment.strftime('%Y-%m-%d %H:%M:%S')} {offset}"


def read_header(stream): # Parses the `<type> <size>` declaration in front of every object body
    header = stream.read_line()
    obj_type, sep, size = header.partition(' ')
    if not sep:
        if obj_type and obj_type not in OBJECT_TYPES:
            raise UnknownObjectType(obj_type)
        raise MalformedObjectHeader(f"Invalid object header: '{header}'")
    if obj_type not in OBJECT_TYPES:
        raise UnknownObjectType(obj_type)
    if not size.isdigit() or not size.isascii():
        raise MalformedObjectHeader(f"Invalid object size in header: '{header}'")
    return obj_type, int(size)


def decode_blob(stream):
    lines = []
    while not stream.at_end():
        lines.append(stream.read_line())
    return Blob(lines=tuple(lines))


def decode_tree(stream):
    entries = []
    while not stream.at_end():
        item = stream.read_until_nul()
        mode, sep, name = item.partition(' ')
        if not sep:
            raise MalformedTreeEntry(f"Tree entry has no space between mode and name: '{item}'")
        try:
            raw = stream.read_bytes(RAW_ID_LENGTH)
        except DecodeError as e:
            raise MalformedTreeEntry(f"Tree entry '{name}' has a truncated object id") from e
        entries.append(TreeEntry(mode=mode, name=name, id=hex_id(raw)))
    return Tree(entries=tuple(entries))


def _user_action(line, tokens):
    # `<key> <name...> <email> <epoch> <offset>`, the name may contain spaces
    if len(tokens) < 4:
        raise MalformedCommitHeader(f"Incomplete {tokens[0]} line: '{line}'")
    return UserAction(
        name=' '.join(tokens[1:-3]),
        email=format_email(tokens[-3]),
        timestamp=format_timestamp(tokens[-2], tokens[-1]),
    )


def decode_commit(stream, object_id=''):
    tree = ''
    parents = []
    author = UserAction()
    committer = UserAction()
    message = []

    while not stream.at_end():
        line = stream.read_line()
        if not line.strip():
            continue
        tokens = line.split(' ')
        key = tokens[0]
        if key in ('tree', 'parent') and len(tokens) < 2:
            raise MalformedCommitHeader(f"Missing value in '{line}'")

        if key == 'tree':
            tree = tokens[1]
        elif key == 'parent':
            parents.append(tokens[1])
        elif key == 'author':
            author = _user_action(line, tokens)
        elif key == 'committer':
            committer = _user_action(line, tokens)
        else:
            message.append(' '.join(tokens))

    return Commit(
        id=object_id,
        tree=tree,
        parents=tuple(parents),
        author=author,
        committer=committer,
        message=tuple(message),
    )


def decode_object(source, object_id=''):
    """
    Decodes one compressed object read from the binary file object `source`.
    Returns a Blob, Tree or Commit. Raises a DecodeError subclass on bad input.
    """
    stream = source if isinstance(source, InflatedStream) else InflatedStream(source)
    try:
        obj_type, size = read_header(stream)
    except UnknownObjectType as e:
        raise UnknownObjectType(e.obj_type, object_id) from None
    logger.debug("decoding %s %s (declared size %d)", obj_type, object_id or '<anonymous>', size)

    match obj_type:
        case 'blob':
            return decode_blob(stream)
        case 'tree':
            return decode_tree(stream)
        case 'commit':
            return decode_commit(stream, object_id)


def read_object(git_dir, object_id): # Reads and decodes an object by its SHA-1 hash
    if not is_object_id(object_id):
        raise InvalidObjectId(object_id)

    object_path = repository.object_path(git_dir, object_id)

    if not os.path.isfile(object_path):
        raise ObjectNotFound(object_id, object_path)

    try:
        source = open(object_path, 'rb')
    except OSError as e:
        raise ObjectReadError(object_id, e.strerror or e) from e

    with InflatedStream(source) as stream:
        try:
            return decode_object(stream, object_id)
        except OSError as e:
            raise ObjectReadError(object_id, e.strerror or e) from e
