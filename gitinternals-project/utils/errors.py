# What it does: Defines every failure kind the object reader can raise, so callers can tell them apart
# How it does: A small class hierarchy rooted at GitInternalsError. Everything that goes wrong while turning bytes into objects is a DecodeError
# What data structure it uses: Tree (class hierarchy)


class GitInternalsError(Exception):
    pass


class ObjectNotFound(GitInternalsError, FileNotFoundError):
    def __init__(self, object_id, path=None):
        self.object_id = object_id
        self.path = path
        super().__init__(f"Object not found: {object_id}")

    def __str__(self):
        return f"Object not found: {self.object_id}"


class RefNotFound(GitInternalsError):
    def __init__(self, name):
        self.name = name
        super().__init__(f"Branch not found: {name}")


class ConfigError(GitInternalsError):
    pass


class DecodeError(GitInternalsError):
    pass


class DecompressionError(DecodeError):
    pass


class MalformedObjectHeader(DecodeError):
    pass


class UnknownObjectType(DecodeError):
    def __init__(self, obj_type, object_id=""):
        self.obj_type = obj_type
        self.object_id = object_id
        where = f" for object {object_id}" if object_id else ""
        super().__init__(f"Unknown object type '{obj_type}'{where}")


class MalformedTreeEntry(DecodeError):
    pass


class MalformedCommitHeader(DecodeError):
    pass


class InvalidObjectId(ObjectNotFound):
    # Not shaped like a 40 character hex hash, so it never names a stored object
    def __str__(self):
        return f"Not a valid object name: {self.object_id}"


class ObjectReadError(GitInternalsError):
    def __init__(self, object_id, reason):
        self.object_id = object_id
        self.reason = reason
        super().__init__(f"Could not read object {object_id}: {reason}")
