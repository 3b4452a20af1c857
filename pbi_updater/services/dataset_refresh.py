"""
Business logic for triggering dataset refreshes company by company.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from pbi_updater.clients import PowerBIClient
from pbi_updater.core.errors import GroupNotFoundError
from pbi_updater.models import TokenRecord
from pbi_updater.schemas import AllGroups, DispatchMode, RefreshResult, SingleGroup

logger = logging.getLogger(__name__)

ResourceGroups = Dict[int, List[str]]


class DatasetRefreshService:
    """Issue one refresh per dataset, carrying on past individual failures."""

    def __init__(self, powerbi_client: PowerBIClient) -> None:
        self._powerbi = powerbi_client

    async def dispatch(
        self,
        mode: DispatchMode,
        groups: ResourceGroups,
        token: TokenRecord,
        *,
        on_group: Optional[Callable[[int], None]] = None,
        on_result: Optional[Callable[[RefreshResult], None]] = None,
    ) -> List[RefreshResult]:
        """
        Refresh the datasets selected by ``mode`` and return outcomes in visit order.

        Raises ``GroupNotFoundError`` before any request is made when a single
        company is requested that is not in ``groups``.
        """
        selected = self._select(mode, groups)
        results: List[RefreshResult] = []

        for group_key, dataset_ids in selected:
            if on_group is not None:
                on_group(group_key)
            logger.info(
                "Refreshing company datasets",
                extra={"group_key": group_key, "datasets": len(dataset_ids)},
            )
            for dataset_id in dataset_ids:
                outcome = await self._powerbi.refresh_dataset(dataset_id, token)
                result = RefreshResult(
                    group_key=group_key, dataset_id=dataset_id, outcome=outcome
                )
                results.append(result)
                if on_result is not None:
                    on_result(result)

        failed = sum(1 for result in results if not result.outcome.success)
        if failed:
            logger.warning("%d of %d refresh requests failed", failed, len(results))
        return results

    @staticmethod
    def _select(
        mode: DispatchMode, groups: ResourceGroups
    ) -> List[Tuple[int, Sequence[str]]]:
        if isinstance(mode, AllGroups):
            return list(groups.items())
        if isinstance(mode, SingleGroup):
            if mode.key not in groups:
                raise GroupNotFoundError(mode.key)
            return [(mode.key, groups[mode.key])]
        raise TypeError(f"Unsupported dispatch mode: {mode!r}")


__all__ = ["DatasetRefreshService", "ResourceGroups"]
