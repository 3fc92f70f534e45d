class CommandNotFound(Exception):
    def __init__(self, name: str):
        self.name = name
        self.message = f"Command '{name}' not found"
        super().__init__(self.message)
