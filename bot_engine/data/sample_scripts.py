from bot_engine.domain.models import (
    Block,
    BubbleStepType,
    ChoiceInputOptions,
    ChoiceItem,
    Comparison,
    ComparisonOperator,
    ConditionOptions,
    Edge,
    InputOptions,
    InputStepType,
    IntegrationStepType,
    LogicStepType,
    ResponseVariableMapping,
    Script,
    SetVariableOptions,
    Source,
    Step,
    Target,
    Variable,
    Webhook,
    WebhookOptions,
)

# ==============================================================================
# VARIABLES
# ==============================================================================

var_name = Variable(id="var_name", name="Name")
var_email = Variable(id="var_email", name="Email")
var_plan = Variable(id="var_plan", name="Plan")
var_seats = Variable(id="var_seats", name="Seats")
var_total = Variable(id="var_total", name="Total")
var_company = Variable(id="var_company", name="Company")

# ==============================================================================
# BLOCK 1: WELCOME
# ==============================================================================

# --- Greeting bubble, then collect the name ---
welcome_bubble = Step(
    id="welcome_bubble",
    block_id="block_welcome",
    type=BubbleStepType.TEXT,
    content="Hi there! Let's find the right plan for your team.",
)

ask_name = Step(
    id="ask_name",
    block_id="block_welcome",
    type=InputStepType.TEXT,
    options=InputOptions(variable_id="var_name"),
)

# --- Single choice: branches on the selected plan ---
ask_plan = Step(
    id="ask_plan",
    block_id="block_welcome",
    type=InputStepType.CHOICE,
    options=ChoiceInputOptions(
        item_ids=["item_starter", "item_business"],
        variable_id="var_plan",
    ),
    edge_id="edge_plan_default",
)

item_starter = ChoiceItem(
    id="item_starter", step_id="ask_plan", content="Starter", edge_id="edge_starter"
)
item_business = ChoiceItem(
    id="item_business", step_id="ask_plan", content="Business", edge_id="edge_business"
)

# ==============================================================================
# BLOCK 2: BUSINESS QUOTE
# ==============================================================================

ask_seats = Step(
    id="ask_seats",
    block_id="block_business",
    type=InputStepType.NUMBER,
    options=InputOptions(variable_id="var_seats"),
)

compute_total = Step(
    id="compute_total",
    block_id="block_business",
    type=LogicStepType.SET_VARIABLE,
    options=SetVariableOptions(
        variable_id="var_total", expression_to_evaluate="{{Seats}} * 12"
    ),
)

# --- Large teams go to sales, everyone else continues here ---
check_team_size = Step(
    id="check_team_size",
    block_id="block_business",
    type=LogicStepType.CONDITION,
    options=ConditionOptions(
        comparisons=[
            Comparison(
                id="cmp_seats",
                variable_id="var_seats",
                operator=ComparisonOperator.GREATER,
                value="50",
            )
        ]
    ),
    true_edge_id="edge_sales",
)

lookup_company = Step(
    id="lookup_company",
    block_id="block_business",
    type=IntegrationStepType.WEBHOOK,
    options=WebhookOptions(
        webhook=Webhook(
            url="https://api.example.com/companies",
            method="GET",
            query_params=[],
        ),
        response_variable_mapping=[
            ResponseVariableMapping(
                id="map_company", body_path="data.company.name", variable_id="var_company"
            )
        ],
    ),
)

quote_bubble = Step(
    id="quote_bubble",
    block_id="block_business",
    type=BubbleStepType.TEXT,
    content="{{Company}}: {{Seats}} seats come to ${{Total}} per month.",
)

ask_email = Step(
    id="ask_email",
    block_id="block_business",
    type=InputStepType.EMAIL,
    options=InputOptions(variable_id="var_email"),
)

# ==============================================================================
# BLOCKS & EDGES
# ==============================================================================

block_welcome = Block(
    id="block_welcome",
    title="Welcome",
    step_ids=["welcome_bubble", "ask_name", "ask_plan"],
)

block_business = Block(
    id="block_business",
    title="Business quote",
    step_ids=[
        "ask_seats",
        "compute_total",
        "check_team_size",
        "lookup_company",
        "quote_bubble",
        "ask_email",
    ],
)

block_starter = Block(id="block_starter", title="Starter", step_ids=[])
block_sales = Block(id="block_sales", title="Talk to sales", step_ids=[])

EDGES = [
    Edge(
        id="edge_starter",
        from_=Source(block_id="block_welcome", step_id="ask_plan", node_id="item_starter"),
        to=Target(block_id="block_starter"),
    ),
    Edge(
        id="edge_business",
        from_=Source(block_id="block_welcome", step_id="ask_plan", node_id="item_business"),
        to=Target(block_id="block_business"),
    ),
    Edge(
        id="edge_plan_default",
        from_=Source(block_id="block_welcome", step_id="ask_plan"),
        to=Target(block_id="block_starter"),
    ),
    Edge(
        id="edge_sales",
        from_=Source(block_id="block_business", step_id="check_team_size"),
        to=Target(block_id="block_sales"),
    ),
]

# ==============================================================================
# SCRIPT REGISTRY
# ==============================================================================

PLAN_FINDER = Script(
    id="plan_finder",
    name="Plan finder",
    blocks={
        block.id: block
        for block in [block_welcome, block_business, block_starter, block_sales]
    },
    steps={
        step.id: step
        for step in [
            welcome_bubble,
            ask_name,
            ask_plan,
            ask_seats,
            compute_total,
            check_team_size,
            lookup_company,
            quote_bubble,
            ask_email,
        ]
    },
    edges={edge.id: edge for edge in EDGES},
    choice_items={item.id: item for item in [item_starter, item_business]},
    variables=[var_name, var_email, var_plan, var_seats, var_total, var_company],
)

SAMPLE_SCRIPTS = {PLAN_FINDER.id: PLAN_FINDER}
