from minioc import component


@component("duplicate")
class SecondDuplicate:
    pass
