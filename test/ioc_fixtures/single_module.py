from minioc import component


@component
class DefaultNamed:
    pass
