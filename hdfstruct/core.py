"""
Core module for the abstraction of a file format

"""
import logging
from typing import Tuple, List, Dict

from .fields import Field
from .meta import MetaChunk
from .streams import Stream
from .exceptions import HDFStructException, UnpackException
from .properties import get_root_from_chunk


logger = logging.getLogger(__name__)


class Chunk(Field, metaclass=MetaChunk):
    """
    Together with Field is the main class that defines a format: the fields declared
    in the class body are unpacked in order of declaration.

    A Chunk can contain sub-chunks, simply declaring an instance of another
    Chunk as a field.

    Passing some data with the constructor (bytes, a path or a Stream) triggers the
    unpacking immediately.
    """

    def __init__(self, data=None, **kwargs):
        super().__init__(**kwargs)

        if data is not None:
            stream = data if isinstance(data, Stream) else Stream(data)
            logger.debug('unpacking \'%s\' from %r' % (self.__class__.__name__, stream))
            self.unpack(stream)

    def get_ordered_fields_name(self) -> List[str]:
        return self._meta.fields

    def get_fields(self) -> List[Tuple[str, Field]]:
        '''It returns a list of couples (name, instance) for each field.'''
        return [(_, getattr(self, _)) for _ in self.get_ordered_fields_name()]

    def __repr__(self):
        msg = []
        for field_name, field in self.get_fields():
            msg.append('%s=%s' % (field_name, repr(field)))
        return '<%s(%s)>' % (self.__class__.__name__, ','.join(msg))

    def __str__(self):
        msg = ''
        for field_name, field in self.get_fields():
            msg += '%s: %s\n' % (field_name, repr(field))
        return msg

    @property
    def root(self):
        '''Obtain the final father of this chunk'''
        return get_root_from_chunk(self)

    @property
    def isRoot(self):
        return self.root is self

    def _get_size(self):
        '''the size MUST be derived from the subchunks'''
        return sum(field.size for _, field in self.get_fields())

    @property
    def layout(self) -> Dict[str, Tuple[int, int]]:
        result = {}
        for name, field in self.get_fields():
            result[name] = (field.offset, field.size)

        return result

    def validate(self, stream) -> bool:
        '''Hook called after all the fields are unpacked, return False if the
        data doesn't make sense for this chunk.'''
        return True

    def unpack(self, stream):
        '''This is one of the main APIs to take care of: its aim is to take a binary
        data and transform in the representation given by the class this method
        is implemented.

        Each field is read in order from the actual position of the stream; if one
        of them fails, the name of the field is appended to the chain of the exception
        so that the caller knows where the problem is.
        '''
        self.offset = stream.tell()
        for field_name, field in self.get_fields():
            logger.debug('unpacking %s.%s at offset 0x%x' % (self.__class__.__name__, field_name, stream.tell()))

            try:
                field.unpack(stream)
            except HDFStructException as e:
                e.chain.append(field_name)
                raise

        if not self.validate(stream):
            logger.warning(f'validation for \'{self.__class__.__name__}\' failed')
            raise UnpackException(chain=[], message=f'{self.__class__.__name__} failed validation')
