from minioc import component


@component("helper")
class Helper:
    pass
