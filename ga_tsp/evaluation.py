from typing import Union

import numpy as np
import torch

from .errors import InvalidParameter


TIE_DECIMALS = 9


def _as_tensor(dist: np.ndarray, device: torch.device) -> torch.Tensor:
    if torch.is_tensor(dist):
        return dist.to(device=device, dtype=torch.float64)
    return torch.as_tensor(np.array(dist, dtype=np.float64), device=device)


def path_lengths(
    dist: Union[np.ndarray, torch.Tensor],
    population: np.ndarray,
    device: Union[str, torch.device] = "cpu",
) -> np.ndarray:
    """Closed tour length of every row of ``population``.

    Each row is gathered against its own roll by one position, so the
    last-to-first edge is included.
    """
    device = torch.device(device)
    dist_t = _as_tensor(dist, device)
    idx = torch.as_tensor(np.asarray(population, dtype=np.int64), device=device)
    if idx.ndim == 1:
        idx = idx.unsqueeze(0)
    a = idx
    b = idx.roll(-1, dims=1)
    lengths = dist_t[a, b].sum(dim=1)
    return lengths.cpu().numpy()


def ranking_fitness(objective: np.ndarray, pressure: float = 1.5) -> np.ndarray:
    """Linear-ranking fitness for a minimisation objective.

    The shortest tour gets ``pressure`` and the longest gets ``2 - pressure``,
    with equal spacing in between. Individuals with equal objective share the
    mean of the values their ranks would get, so the transform stays strictly
    decreasing in the objective.
    """
    if not 1.0 < pressure < 2.0:
        raise InvalidParameter(f"Selective pressure must lie in (1, 2), got {pressure}.")
    obj = np.asarray(objective, dtype=np.float64)
    nind = obj.shape[0]
    if nind == 0:
        raise InvalidParameter("Cannot rank an empty population.")
    if nind == 1:
        return np.ones(1)
    # Position 0 is the worst individual.
    order = np.argsort(-obj, kind="stable")
    levels = 2.0 - pressure + 2.0 * (pressure - 1.0) * np.arange(nind) / (nind - 1)
    ranked = np.empty(nind)
    ranked[order] = levels
    # Lengths summed in a different order can differ in the last bits.
    _, groups = np.unique(np.round(obj, TIE_DECIMALS), return_inverse=True)
    sums = np.bincount(groups, weights=ranked)
    counts = np.bincount(groups)
    return sums[groups] / counts[groups]
