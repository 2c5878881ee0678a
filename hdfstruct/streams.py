import os
import logging


logger = logging.getLogger(__name__)


class Stream(object):
    '''This is a simple wrapper around bytes-like/path objects to
    uniform their access: all the data is exposed as a memoryview so that
    slicing never copies it, and no read can go past its end.

    Like a file object, read() returns less data than requested when the
    end of the stream is reached; it's up to the fields to complain about that.'''
    def __init__(self, obj):
        '''Here we normalize the object in order to be accessed as a memoryview'''
        self._type = type(obj)
        self.obj = obj
        self._position = 0

        if isinstance(obj, os.PathLike):
            self.obj = os.fsdecode(obj)

        init_method_name = 'init_%s' % self.obj.__class__.__name__

        init_method = getattr(self, init_method_name, None)

        if init_method is None:
            raise ValueError('\'%s\' is the wrong kind of object to use as a stream' % self._type.__name__)

        init_method()

    def __repr__(self):
        return f'<{self.__class__.__name__}({self._type.__name__}, size={len(self)}, position={self._position})>'

    def __len__(self):
        return len(self.obj)

    def init_str(self):
        '''We think this is a path'''
        logger.debug('opening path \'%s\'' % self.obj)
        with open(self.obj, 'rb') as f:
            self.obj = memoryview(f.read())

    def init_bytes(self):
        '''We think these are raw bytes'''
        self.obj = memoryview(self.obj)

    init_bytearray = init_bytes

    def init_memoryview(self):
        self.obj = self.obj.cast('B')

    def tell(self):
        return self._position

    def seek(self, offset):
        if not isinstance(offset, int) or offset < 0:
            raise ValueError('\'%r\' is the wrong kind of offset to use' % (offset,))

        self._position = offset

        return self

    def remaining(self):
        return max(len(self) - self._position, 0)

    def read(self, size):
        '''Return at most size bytes from the actual position.'''
        start = min(self._position, len(self))
        data = self.obj[start:start + size]
        self._position = start + len(data)

        return data

    def read_all(self):
        return self.read(self.remaining())

    def slice(self, offset, length):
        '''Return the view of the data at the given (absolute) range, or an empty view
        if the range doesn't fit into the stream.

        Python integers don't overflow, so offset + length is always exact.'''
        if not self.contains(offset, length):
            return self.obj[0:0]

        return self.obj[offset:offset + length]

    def contains(self, offset, length):
        return offset >= 0 and length >= 0 and offset + length <= len(self)
