class HDFStructException(Exception):
    '''Base class to extend in order to throw exception in hdfstruct.

    It takes a single argument that represents the chain of the layer that
    caused the exception: each chunk crossed by the exception appends
    the name of its field, so the innermost layer comes first.
    '''

    def __init__(self, chain, message=None):
        self.chain = chain
        self.message = message
        super().__init__(message)

    @property
    def path(self):
        return '.'.join(reversed(self.chain))

    def __str__(self):
        msg = self.message or self.__class__.__name__
        if self.chain:
            msg = f'{msg} (at {self.path})'

        return msg


class UnpackException(HDFStructException):
    pass


class MagicException(HDFStructException):
    pass


class UnrecoverableException(HDFStructException):
    '''This is useful when is not possible to let an unknown value
    slip through the parsing.'''
    pass


class ParseError(HDFStructException):
    '''File-level error: the whole parse is aborted.'''
    pass


class IncompleteFile(ParseError, UnpackException):
    '''The buffer is too short for a header or a descriptor block.'''
    pass


class InvalidMagicNumber(ParseError, MagicException):
    pass


class CyclicDirectory(ParseError, UnrecoverableException):
    '''The chain of descriptor blocks points back to an already visited block.'''

    def __init__(self, chain, offset, message=None):
        self.offset = offset
        super().__init__(chain, message=message or f'descriptor block at 0x{offset:08x} already visited')


class CorruptTag(UnpackException):
    '''A recognized tag failed to unpack and the caller asked to be strict about it.'''

    def __init__(self, chain, tag, message=None):
        self.tag = tag
        super().__init__(chain, message=message or f'tag {tag} is corrupt')


class UnknownTag(HDFStructException):

    def __init__(self, chain, tag, message=None):
        self.tag = tag
        super().__init__(chain, message=message or f'tag {tag} is not recognized')
