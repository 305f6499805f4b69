from collections.abc import Sequence
from typing import Any, Protocol, runtime_checkable

ElementId = int


@runtime_checkable
class Transport(Protocol):
	"""What a Browser needs from the connection to the remote browser."""

	async def execute_script(self, script: str, args: Sequence[Any] = (), element_id: ElementId | None = None) -> Any:
		"""Run a JavaScript function body with `args` as `arguments`.

		When `element_id` is given, `this` is bound to that node.
		"""
		...

	async def find_element(self, selector: str, parent_id: ElementId | None = None) -> ElementId | None: ...

	async def find_elements(self, selector: str, parent_id: ElementId | None = None) -> list[ElementId]: ...

	async def navigate(self, url: str) -> None: ...

	async def close(self) -> None: ...
