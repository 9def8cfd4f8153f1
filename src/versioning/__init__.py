"""NuGet version parsing, ordering and resolution."""
