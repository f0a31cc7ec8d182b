"""View Model Presenter — map a use case output to a view model and send it.

Invariants:
    - The mapping decides content, status and error shape; the sender only
      overrides the status when encoding fails
    - One output in, one response out; the output is never inspected here

Design Decisions:
    - Composition (mapping + sender) over per-endpoint presenter classes:
      most endpoints only differ by their mapping function
"""

from collections.abc import Callable
from typing import Generic, TypeVar

from cleanflow.api.response_sender import HTTPResponseSender
from cleanflow.core.contracts import ResponseWriter, ViewModel
from cleanflow.core.request_context import RequestContext

O = TypeVar("O")


class ViewModelPresenter(Generic[O]):
    """Presenter built from an Output -> ViewModel function."""

    def __init__(
        self,
        to_view_model: Callable[[O], ViewModel],
        response_sender: HTTPResponseSender | None = None,
    ):
        self.to_view_model = to_view_model
        self.response_sender = response_sender or HTTPResponseSender()

    async def present(
        self, context: RequestContext, writer: ResponseWriter, output: O,
    ) -> None:
        await self.response_sender.send(context, writer, self.to_view_model(output))
