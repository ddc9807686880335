from nodecatalog import Environment, Facts, Node, NodeService, NodeSettings
from nodecatalog.context import NodeContext
from nodecatalog.termini.memory import MemoryTerminus

import logging

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
)

# --------------------------------
# Settings and collaborators
# --------------------------------

settings = NodeSettings(
    environment="production",
    node_terminus="memory",
    trusted_server_facts=True,
)

context = NodeContext.default(settings)
context.environments.register(Environment("staging", manifest="staging/site.pp"))

terminus = MemoryTerminus(context)
service = NodeService(context, terminus)

# --------------------------------
# Node data and facts
# --------------------------------

declared = Node(
    "web01.example.com",
    context,
    classes=["base", "nginx"],
    parameters={"role": "frontend"},
)
declared.environment_name = "staging"
terminus.save(declared)

context.facts_store.save(
    Facts(
        "web01.example.com",
        {"hostname": "web01", "domain": "example.com", "role": "ignored"},
    )
)

# --------------------------------
# Run one cycle
# --------------------------------

node = service.prepare(
    "web01.example.com",
    server_facts={"servername": "master01", "serverversion": "8.0"},
)

print("\n=== Node ===\n")
print(node.to_data_hash())
print("names:", node.names())
print("trusted:", dict(context.trusted_scope.trusted))
