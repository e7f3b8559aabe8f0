"""Generation core: reference discovery, model and request-wrapper emission."""
