import pytest

from hdfstruct.core import Chunk
from hdfstruct.exceptions import HDFStructException, UnpackException
from hdfstruct.fields import StructField, StringField
from hdfstruct.properties import Dependency


class Dummy(Chunk):
    a = StructField('I')
    b = StringField(4)
    c = StructField('H')


def test_chunk():
    """Check that unpacking a Chunk made of fields behaves correctly."""
    dummy = Dummy(b'\x00\x00\x0b\xad' + b'abcd' + b'\xbe\xef')

    assert dummy.get_ordered_fields_name() == ['a', 'b', 'c']

    assert dummy.a.value == 0xbad
    assert dummy.a.father is dummy
    assert dummy.b.value == b'abcd'
    assert dummy.c.value == 0xbeef

    assert dummy.size == 10
    assert dummy.layout == {
        'a': (0, 4),
        'b': (4, 4),
        'c': (8, 2),
    }
    assert dummy.isRoot


def test_chunk_instances_dont_share_fields():
    first = Dummy(b'\x00\x00\x00\x01' + b'AAAA' + b'\x00\x01')
    second = Dummy(b'\x00\x00\x00\x02' + b'BBBB' + b'\x00\x02')

    assert first.a is not second.a
    assert first.a.value == 1
    assert second.a.value == 2


def test_chunk_inheritance():
    class Child(Dummy):
        d = StructField('B')

    child = Child(b'\x00' * 10 + b'\x2a')

    assert child.get_ordered_fields_name() == ['a', 'b', 'c', 'd']
    assert child.d.value == 0x2a
    assert Dummy._meta.fields == ['a', 'b', 'c']


def test_nested_chunk():
    class Inner(Chunk):
        x = StructField('I')

    class Outer(Chunk):
        first = StructField('B')
        inner = Inner()

    outer = Outer(b'\x01\x00\x00\x00\x02')

    assert outer.inner.x.value == 2
    assert outer.inner.offset == 1
    assert outer.inner.father is outer
    assert outer.inner.root is outer
    assert not outer.inner.isRoot

    with pytest.raises(UnpackException) as excinfo:
        Outer(b'\x01\x02')

    assert excinfo.value.chain == ['x', 'inner']
    assert 'inner.x' in str(excinfo.value)


def test_chunk_validate():
    class Exact(Chunk):
        a = StructField('H')

        def validate(self, stream):
            return stream.remaining() == 0

    assert Exact(b'\x00\x01').a.value == 1

    with pytest.raises(UnpackException):
        Exact(b'\x00\x01\x02')


def test_dependency_from_root():
    class Header(Chunk):
        length = StructField('B')

    class Message(Chunk):
        header = Header()
        body   = StringField(Dependency('header.length'))

    message = Message(b'\x03abcdef')

    assert message.body.value == b'abc'
    assert message.body.size == 3


def test_chain_of_any_exception():
    class Failing(StructField):
        def unpack(self, stream):
            raise HDFStructException(chain=[], message='something wrong')

    class Inner(Chunk):
        x = Failing('B')

    class Outer(Chunk):
        inner = Inner()

    with pytest.raises(HDFStructException) as excinfo:
        Outer(b'\x01')

    assert excinfo.value.chain == ['x', 'inner']
    assert str(excinfo.value) == 'something wrong (at inner.x)'
