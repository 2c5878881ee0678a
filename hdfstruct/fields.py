"""
A Field is "fundamental" datatype from the format point of view, something directly
unpackable from a stream without the need of sub-components.

HDF stores everything in network order, so the fields are big-endian unless
indicated otherwise.
"""
import logging
import struct

from .enum import Compliant
from .meta import FieldBase, Endianess
from .properties import Dependency
from .exceptions import UnpackException, MagicException


logger = logging.getLogger(__name__)


class Field(FieldBase):
    """Base class to subclass from"""

    def __init__(self, name=None, father=None, default=None, offset=None,
                 endianess=Endianess.BIG_ENDIAN, compliant=Compliant.INHERIT, is_magic=False):
        super().__init__()
        self.name = name
        self.father = father
        self.default = default
        self.offset = offset
        self.endianess = endianess
        self.compliant = compliant
        self.is_magic = is_magic

        self.init()

    def init(self):
        self.value = self.value_from_default()

    def value_from_default(self):
        return self.default

    def __str__(self):
        return str(self.value)

    def is_compliant(self, level):
        '''Returns True if this field, or the first father not inheriting, requires
        the given level of compliance.'''
        instance = self
        while instance is not None:
            if instance.compliant & level:
                return True
            if not instance.compliant & Compliant.INHERIT:
                break

            instance = instance.father

        return False

    def _get_size(self):
        raise NotImplementedError(f"method {self.__class__.__name__}._get_size() not implemented")

    size = property(
        fget=lambda self: self._get_size(),
    )

    def check_magic(self):
        if not self.is_magic or self.value == self.default:
            return

        logger.warning('the magic doesn\'t correspond: %r instead of %r' % (self.value, self.default))
        if self.is_compliant(Compliant.MAGIC):
            raise MagicException(chain=[], message=f'invalid magic {self.value!r}')

    def unpack(self, stream):
        raise NotImplementedError('you need to implement this in the subclass')


class StructField(Field):
    """
    Simplest of the fields: mimic the behaviour of the struct module unpacking
    integers from bytes.
    """

    def __init__(self, format, default=0, **kw):
        self.format = format
        super().__init__(default=default, **kw)

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, hex(self.value))

    def get_format(self):
        return '%s%s' % ('<' if self.endianess == Endianess.LITTLE_ENDIAN else '>', self.format)

    def _get_size(self):
        return struct.calcsize(self.get_format())

    def unpack(self, stream):
        self.offset = stream.tell()
        raw = stream.read(self.size)

        try:
            self.value = struct.unpack(self.get_format(), raw)[0]
        except struct.error as e:
            logger.debug('%s at offset 0x%x: %s' % (self.__class__.__name__, self.offset, e))
            raise UnpackException(chain=[], message=f'expected {self.size} bytes, got {len(raw)}')

        self.check_magic()


class StringField(Field):
    """Represent a contiguous chunk of bytes, its length can be fixed or a Dependency."""

    def __init__(self, n=None, **kw):
        if n is None and 'default' not in kw:
            raise ValueError("StringField must have 'n' or 'default' indicated!")

        self._n = n if n is not None else len(kw['default'])

        super().__init__(**kw)

    def __repr__(self):
        return '<%s(%s)>' % (self.__class__.__name__, repr(self.value))

    def __len__(self):
        return self.length

    @property
    def length(self):
        return self._n.resolve(self) if isinstance(self._n, Dependency) else self._n

    def value_from_default(self):
        return self.default if self.default is not None else b''

    def _get_size(self):
        return self.length

    def unpack(self, stream):
        self.offset = stream.tell()
        length = self.length
        raw = stream.read(length)

        if len(raw) != length:
            raise UnpackException(chain=[], message=f'expected {length} bytes, got {len(raw)}')

        self.value = bytes(raw)

        self.check_magic()


class TextField(Field):
    '''Takes as much stream as possible and decodes it as text.

    The text is kept verbatim (i.e. with the padding NULs, if any).'''

    def __init__(self, encoding='utf-8', **kw):
        self.encoding = encoding
        kw.setdefault('default', '')
        super().__init__(**kw)

    def __repr__(self):
        return '<%s(%r)>' % (self.__class__.__name__, self.value)

    def _get_size(self):
        return len(self.value.encode(self.encoding))

    def unpack(self, stream):
        self.offset = stream.tell()
        raw = stream.read_all()

        try:
            self.value = str(raw, self.encoding)
        except UnicodeDecodeError as e:
            logger.debug('%s at offset 0x%x: %s' % (self.__class__.__name__, self.offset, e))
            raise UnpackException(chain=[], message=f'text is not valid {self.encoding}')


class ArrayField(Field):
    '''Unpack an array of fixed-size elements.

    The number of elements is indicated via the parameter named "n" as an
    integer or as a Dependency; the element passed as first argument is used
    as prototype for all of them.

    Before reading anything it is checked that the stream has enough data for
    all the elements, so a bogus count is rejected without being trusted.
    '''

    def __init__(self, field_cls, n=0, **kw):
        if not isinstance(n, (int, Dependency)):
            raise ValueError('n is \'%s\' must be of the right type' % n.__class__.__name__)

        self.field_cls = field_cls
        self._n = n

        super().__init__(**kw)

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.value!r})>'

    def __getitem__(self, item):
        return self.value[item]

    def __iter__(self):
        return iter(self.value)

    def __len__(self):
        return len(self.value)

    @property
    def n(self):
        return self._n.resolve(self) if isinstance(self._n, Dependency) else self._n

    def value_from_default(self):
        return []

    def _get_size(self):
        return sum(element.size for element in self.value)

    def instance_element(self):
        return self.field_cls.create(father=self)  # pass the father so that we don't lose the hierarchy

    def unpack(self, stream):
        self.offset = stream.tell()
        n = self.n
        needed = n * self.field_cls.size

        if needed > stream.remaining():
            raise UnpackException(
                chain=[], message=f'{n} elements need {needed} bytes, only {stream.remaining()} available')

        self.value = []
        for index in range(n):
            element = self.instance_element()
            try:
                element.unpack(stream)
            except UnpackException as e:
                e.chain.append(str(index))
                raise
            self.value.append(element)
