"""Namespace reserved for Go module tooling; it holds no modules yet."""