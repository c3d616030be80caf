from minioc import autowired, component, scope


@component("punctuation")
class Punctuation:
    mark = "!"


@component("greeter")
class Greeter:
    punctuation = autowired()

    def greet(self, name: str) -> str:
        return f"Hello {name}{self.punctuation.mark}"


@component("prototype_greeter")
@scope("prototype")
class PrototypeGreeter(Greeter):
    pass
