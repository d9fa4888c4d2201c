import importlib

mod = "jtdinfer"
class LazyLoader:
    """
    Lazy loader for the jtdinfer functions to keep package import cheap.
    """
    def __init__(self, mappings):
        self._modules = {}
        self._mappings = mappings

    def _load_module(self, module_name):
        if module_name not in self._modules:
            self._modules[module_name] = importlib.import_module(module_name)
        return self._modules[module_name]

    def __getattr__(self, item):
        if item in self._mappings:
            module_name, attr_name = self._mappings[item]
            module = self._load_module(module_name)
            return getattr(module, attr_name)
        try:
            return self._load_module(f"{mod}.{item}")
        except ModuleNotFoundError as e:
            if e.name != f"{mod}.{item}":
                raise
            raise AttributeError(f"module {mod!r} has no attribute {item!r}") from e

# Define the public names and their corresponding module paths
_mappings = {
    "Inferrer": (f"{mod}.schema_inference", "Inferrer"),
    "infer_jtd_schema_from_json": (f"{mod}.schema_inference", "infer_jtd_schema_from_json"),
    "Hints": (f"{mod}.hints", "Hints"),
    "HintSet": (f"{mod}.hints", "HintSet"),
    "NumType": (f"{mod}.numtype", "NumType"),
    "SchemaParams": (f"{mod}.jsontojtd", "SchemaParams"),
    "generate_schema": (f"{mod}.jsontojtd", "generate_schema"),
    "convert_json_to_jtd": (f"{mod}.jsontojtd", "convert_json_to_jtd"),
}

_lazy_loader = LazyLoader(_mappings)

def __getattr__(name):
    return getattr(_lazy_loader, name)
