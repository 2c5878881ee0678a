import logging


logger = logging.getLogger(__name__)


def get_root_from_chunk(instance):
    return get_instance_from_chunk(instance, condition=lambda x: x.father is None)


def get_instance_from_chunk(instance, condition):
    father = instance

    while not condition(father):
        father = father.father

    return father


class Dependency:
    '''This makes the relation between fields possible.

    In practice this class allows to write something like

        class Simple(Chunk):
            rank = fields.StructField('H')
            dimensions = fields.ArrayField(fields.StructField('I'), n=Dependency('.rank'))

    and have the number of elements of the field named 'dimensions' read from
    the field named 'rank' at unpacking time.

    The syntax for defining the expression is inspired from module resolution:
    a leading '.' indicates that we refer to a field at the same level, otherwise
    the path is resolved starting from the root chunk.
    '''
    def __init__(self, expression):
        self.expression = expression

    def __repr__(self):
        return f'<{self.__class__.__name__}({self.expression})>'

    def resolve_field(self, instance):
        # '.rank'.split(".") -> ['', 'rank']
        # 'rank'.split(".") -> ['rank']
        fields_path = self.expression.split('.')

        if fields_path[0] == '':  # we have a relative dependency
            field = instance.father
            fields_path = fields_path[1:]
        else:
            field = get_root_from_chunk(instance)

        if field is None:
            raise AttributeError(f"cannot resolve '{self.expression}' from a field without father")

        for component_name in fields_path:
            field = getattr(field, component_name)

        logger.debug('resolved \'%s\' as field %s' % (self.expression, field.__class__.__name__))

        return field

    def resolve(self, instance):
        '''With this method we resolve the attribute with respect to the instance
        passed as argument.'''
        return self.resolve_field(instance).value
