import pytest

from hdfstruct.core import Chunk
from hdfstruct.enum import Compliant
from hdfstruct.exceptions import UnpackException, MagicException
from hdfstruct.fields import StructField, StringField, TextField, ArrayField
from hdfstruct.meta import Endianess
from hdfstruct.properties import Dependency
from hdfstruct.streams import Stream


def test_structfield_big_endian():
    """Check that by default the integers are in network order."""
    field = StructField('I')

    assert field.size == 4
    assert field.value == 0

    field.unpack(Stream(b'\x01\x02\x03\x04'))

    assert field.value == 0x01020304
    assert field.offset == 0


def test_structfield_little_endian():
    field = StructField('I', endianess=Endianess.LITTLE_ENDIAN)

    field.unpack(Stream(b'\x01\x02\x03\x04'))

    assert field.value == 0x04030201


def test_structfield_short_data():
    field = StructField('I')

    with pytest.raises(UnpackException):
        field.unpack(Stream(b'\x01\x02'))


def test_stringfield():
    field = StringField(4)

    assert field.size == 4
    assert len(field) == 4

    stream = Stream(b'kebab')
    field.unpack(stream)

    assert field.value == b'keba'
    assert stream.tell() == 4

    with pytest.raises(UnpackException):
        field.unpack(stream)

    with pytest.raises(ValueError):
        StringField()


def test_stringfield_magic():
    """Check that a magic field raises only when the compliance is requested."""
    field = StringField(4, default=b'ABCD', is_magic=True, compliant=Compliant.MAGIC)

    with pytest.raises(MagicException):
        field.unpack(Stream(b'ABCE'))

    field = StringField(4, default=b'ABCD', is_magic=True, compliant=Compliant.NONE)
    field.unpack(Stream(b'ABCE'))

    assert field.value == b'ABCE'


def test_textfield():
    field = TextField()

    stream = Stream(b'\x00\x01hello\x00\x00')
    stream.seek(2)
    field.unpack(stream)

    assert field.value == 'hello\x00\x00'
    assert field.size == 7
    assert stream.remaining() == 0


def test_textfield_wrong_encoding():
    with pytest.raises(UnpackException):
        TextField().unpack(Stream(b'\xff\xfe\xfd'))

    field = TextField(encoding='latin1')
    field.unpack(Stream(b'\xff'))

    assert field.value == '\xff'


class Sized(Chunk):
    count    = StructField('B')
    elements = ArrayField(StructField('H'), n=Dependency('.count'))


def test_arrayfield_with_dependency():
    sized = Sized(b'\x03\x00\x01\x00\x02\x00\x03')

    assert len(sized.elements) == 3
    assert [_.value for _ in sized.elements] == [1, 2, 3]
    assert sized.elements[1].value == 2
    assert sized.elements.n == 3
    assert sized.elements.size == 6
    assert sized.elements[0].father is sized.elements
    assert sized.elements.father is sized


def test_arrayfield_checks_room_before_reading():
    """A bogus count must be rejected without reading the elements."""
    with pytest.raises(UnpackException) as excinfo:
        Sized(b'\xff\x00\x01')

    assert excinfo.value.chain == ['elements']


def test_arrayfield_fixed():
    field = ArrayField(StructField('B'), n=2)

    field.unpack(Stream(b'\x0a\x0b\x0c'))

    assert [_.value for _ in field] == [0x0a, 0x0b]


def test_arrayfield_wrong_n():
    with pytest.raises(ValueError):
        ArrayField(StructField('H'), n='3')


def test_compliant_is_inherited():
    class Magic(Chunk):
        magic = StringField(2, default=b'OK', is_magic=True)

    class Container(Chunk):
        header = Magic()

    with pytest.raises(MagicException) as excinfo:
        Container(b'KO', compliant=Compliant.MAGIC)

    assert excinfo.value.chain == ['magic', 'header']
    assert excinfo.value.path == 'header.magic'

    container = Container(b'KO', compliant=Compliant.NONE)

    assert container.header.magic.value == b'KO'
