balances = Hash(default_value=0)
metadata = Hash()

total_supply = Variable()
owner = Variable()
fee_recipient = Variable()
fee_percentage = Variable()

DECIMALS = 18
DEFAULT_FEE_PERCENTAGE = 1 # 1% tax, receiver gets 99%
MIN_FEE_PERCENTAGE = 1
MAX_FEE_PERCENTAGE = 10
NULL_ADDRESS = '0' * 64 # Stands in for mint source and burn destination

# Events
TransferEvent = LogEvent(
    event="Transfer",
    params={
        "from": {'type': str, 'idx': True},
        "to": {'type': str, 'idx': True},
        "amount": {'type': (int, float, decimal)}
    })

ApproveEvent = LogEvent(
    event="Approve",
    params={
        "from": {'type': str, 'idx': True},
        "to": {'type': str, 'idx': True},
        "amount": {'type': (int, float, decimal)}
    })

OwnershipTransferred = LogEvent(
    event="OwnershipTransferred",
    params={
        "previous_owner": {'type': str, 'idx': True},
        "new_owner": {'type': str, 'idx': True}
    })

FeeRecipientChanged = LogEvent(
    event="FeeRecipientChanged",
    params={
        "previous_recipient": {'type': str, 'idx': True},
        "new_recipient": {'type': str, 'idx': True}
    })

FeePercentageChanged = LogEvent(
    event="FeePercentageChanged",
    params={
        "previous_percentage": {'type': int},
        "new_percentage": {'type': int}
    })

@construct
def seed(fee_recipient_address: str, token_name: str, token_symbol: str):
    assert not is_null_address(fee_recipient_address), 'Invalid recipient!'

    metadata['token_name'] = token_name
    metadata['token_symbol'] = token_symbol
    metadata['token_logo_url'] = ''
    metadata['token_website'] = ''

    total_supply.set(0)
    owner.set(ctx.caller)
    fee_recipient.set(fee_recipient_address)
    fee_percentage.set(DEFAULT_FEE_PERCENTAGE)

# --- Access control ---

def require_owner(caller: str, action: str):
    assert caller == owner.get(), f'Only owner can {action}!'

def is_null_address(address: str):
    return not address or address == NULL_ADDRESS

def require_whole_amount(amount: int):
    # Balances and allowances are unsigned integers
    assert isinstance(amount, int), 'Amount must be a whole number!'

@export
def get_owner():
    return owner.get()

@export
def transfer_ownership(new_owner: str):
    require_owner(ctx.caller, 'transfer ownership')
    assert not is_null_address(new_owner), 'Invalid owner!'

    previous_owner = owner.get()
    owner.set(new_owner)

    OwnershipTransferred({"previous_owner": previous_owner, "new_owner": new_owner})

# --- Metadata ---

@export
def change_metadata(key: str, value: Any):
    require_owner(ctx.caller, 'set metadata')
    metadata[key] = value

@export
def get_name():
    return metadata['token_name']

@export
def get_symbol():
    return metadata['token_symbol']

@export
def get_decimals():
    return DECIMALS

# --- Fees ---

def fee_for(amount: int):
    # Floor division: the sender never pays more than the nominal percentage
    return amount * fee_percentage.get() // 100

@export
def compute_fee(amount: int):
    return fee_for(amount)

@export
def get_fee_recipient():
    return fee_recipient.get()

@export
def get_fee_percentage():
    return fee_percentage.get()

@export
def set_fee_recipient(address: str):
    require_owner(ctx.caller, 'set fee recipient')
    assert not is_null_address(address), 'Invalid recipient!'

    previous_recipient = fee_recipient.get()
    fee_recipient.set(address)

    FeeRecipientChanged({"previous_recipient": previous_recipient, "new_recipient": address})

@export
def set_fee_percentage(percentage: int):
    require_owner(ctx.caller, 'set fee percentage')
    assert MIN_FEE_PERCENTAGE <= percentage <= MAX_FEE_PERCENTAGE, \
        f'Invalid fee percentage! Must be between {MIN_FEE_PERCENTAGE} and {MAX_FEE_PERCENTAGE}.'

    previous_percentage = fee_percentage.get()
    fee_percentage.set(percentage)

    FeePercentageChanged({"previous_percentage": previous_percentage, "new_percentage": percentage})

# --- Ledger ---

def credit(account: str, amount: int):
    balances[account] += amount

def debit(account: str, amount: int):
    account_bal = balances[account]
    assert account_bal >= amount, f'Transfer amount exceeds balance for {account}!'
    balances[account] = account_bal - amount

def check_allowance(main_account: str, spender: str, amount: int):
    allowance_left = balances[main_account, spender]
    assert allowance_left >= amount, \
        f'Transfer amount {amount} exceeds allowance {allowance_left} for {main_account} by spender {spender}!'
    return allowance_left

@export
def balance_of(address: str):
    return balances[address]

@export
def allowance(main_account: str, spender: str):
    return balances[main_account, spender]

@export
def get_total_supply():
    return total_supply.get()

@export
def approve(amount: int, to: str):
    assert amount >= 0, 'Cannot approve negative!' # Allow 0 for clearing approval
    require_whole_amount(amount)
    sender = ctx.caller
    balances[sender, to] = amount

    ApproveEvent({"from": sender, "to": to, "amount": amount})

# --- Supply ---

@export
def mint_to(amount: int, to: str):
    require_owner(ctx.caller, 'mint')
    assert amount > 0, 'Insufficient amount!'
    require_whole_amount(amount)
    assert not is_null_address(to), 'Invalid receiver!'

    total_supply.set(total_supply.get() + amount)
    credit(to, amount)

    TransferEvent({"from": NULL_ADDRESS, "to": to, "amount": amount})

@export
def burn(amount: int):
    assert amount >= 0, 'Cannot burn negative!'
    require_whole_amount(amount)
    sender = ctx.caller

    sender_bal = balances[sender]
    assert sender_bal >= amount, f'Burn amount exceeds balance for sender {sender}!'

    balances[sender] = sender_bal - amount
    total_supply.set(total_supply.get() - amount)

    TransferEvent({"from": sender, "to": NULL_ADDRESS, "amount": amount})

# --- Transfers ---

def move(sender: str, to: str, amount: int):
    assert amount > 0, 'Insufficient amount!'
    require_whole_amount(amount)
    assert not is_null_address(to), 'Invalid recipient!'

    fee = fee_for(amount)
    received_amount = amount - fee
    collector = fee_recipient.get()

    # debit holds the last check; nothing is written before it
    debit(sender, amount)
    credit(to, received_amount)
    credit(collector, fee)

    # Net leg first, then the fee leg (emitted even when the fee rounds to 0)
    TransferEvent({"from": sender, "to": to, "amount": received_amount})
    TransferEvent({"from": sender, "to": collector, "amount": fee})

@export
def transfer(amount: int, to: str):
    move(ctx.caller, to, amount)

@export
def transfer_from(amount: int, to: str, main_account: str):
    spender = ctx.caller

    # Allowance is checked before the transfer checks, consumed after them
    allowance_left = check_allowance(main_account, spender, amount)

    move(main_account, to, amount)
    balances[main_account, spender] = allowance_left - amount
