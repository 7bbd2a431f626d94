class OrmPracticeError(Exception):
    pass


class ProfileNotFoundError(OrmPracticeError):
    def __init__(self, name, available=()):
        self.name = name
        self.available = tuple(available)
        super().__init__(
            f"Unknown persistence profile '{name}' (available: {', '.join(self.available) or 'none'})"
        )


class UnknownFieldError(OrmPracticeError, AttributeError):
    def __init__(self, entity, field):
        self.entity = entity
        self.field = field
        super().__init__(f"{entity.__name__} has no mapped field '{field}'")


class NonUniqueResultError(OrmPracticeError):
    pass
