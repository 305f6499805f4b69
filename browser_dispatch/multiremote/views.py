class MultiRemoteError(Exception):
	"""Raised when a fanned-out call failed on at least one instance.

	Every instance has settled by the time this is raised.

	Attributes:
		command: Name of the command that was fanned out
		errors: Exception per failing instance label, in declared instance order
		first_label: Label of the first failing instance in declared order
		first_error: The exception raised by that instance, also set as __cause__
	"""

	def __init__(self, command: str, errors: dict[str, BaseException]):
		if not errors:
			raise ValueError('MultiRemoteError needs at least one instance error')
		self.command = command
		self.errors = errors
		self.first_label, self.first_error = next(iter(errors.items()))
		super().__init__(
			f"Command '{command}' failed on {len(errors)} instance(s) ({', '.join(errors)}): "
			f'{type(self.first_error).__name__}: {self.first_error}'
		)
