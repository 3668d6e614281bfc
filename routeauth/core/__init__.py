"""Authorization core for routeauth: RBAC model, route table and guard."""
