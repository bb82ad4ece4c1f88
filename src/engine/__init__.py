"""Fleet tracking engine — vehicle store, query engine, kinematic simulation."""
