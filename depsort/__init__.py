"""depsort: compute a build order for compilation units from a dependency file."""
