import unittest
from contracting.client import ContractingClient
from pathlib import Path

class TestFeeTokenContract(unittest.TestCase):
    def setUp(self):
        self.client = ContractingClient()
        self.client.flush() # Ensures a clean state

        # Define user accounts
        self.operator = 'sys' # Deployer, becomes the token owner
        self.fee_collector = 'fee_collector'
        self.alice = 'alice'
        self.bob = 'bob'
        self.charlie = 'charlie'

        self.token_name = "con_fee_token"

        # The contract sits next to this test file
        contracts_dir = Path(__file__).resolve().parent

        with open(contracts_dir / "con_fee_token.py") as f:
            code = f.read()
            self.client.submit(
                code,
                name=self.token_name,
                signer=self.operator,
                constructor_args={
                    'fee_recipient_address': self.fee_collector,
                    'token_name': 'TaxedToken',
                    'token_symbol': 'TAX',
                }
            )

        self.con_fee_token = self.client.get_contract(self.token_name)

    def tearDown(self):
        self.client.flush()

    def test_metadata_after_deploy(self):
        print("\n--- Test: Metadata After Deploy ---")
        self.assertEqual(self.con_fee_token.get_name(), 'TaxedToken')
        self.assertEqual(self.con_fee_token.get_symbol(), 'TAX')
        self.assertEqual(self.con_fee_token.get_decimals(), 18)
        self.assertEqual(self.con_fee_token.get_owner(), self.operator)
        self.assertEqual(self.con_fee_token.get_fee_recipient(), self.fee_collector)
        self.assertEqual(self.con_fee_token.get_fee_percentage(), 1)
        self.assertEqual(self.con_fee_token.get_total_supply(), 0)

    def test_mint_to_owner(self):
        print("\n--- Test: Mint To Owner ---")
        self.con_fee_token.mint_to(amount=1000, to=self.operator, signer=self.operator)

        self.assertEqual(self.con_fee_token.balance_of(address=self.operator), 1000)
        self.assertEqual(self.con_fee_token.get_total_supply(), 1000)

    def test_transfer_splits_fee(self):
        print("\n--- Test: Transfer Splits Fee ---")
        self.con_fee_token.mint_to(amount=1000, to=self.alice, signer=self.operator)

        self.con_fee_token.transfer(amount=100, to=self.bob, signer=self.alice)

        self.assertEqual(self.con_fee_token.balance_of(address=self.alice), 900)
        self.assertEqual(self.con_fee_token.balance_of(address=self.bob), 99)
        self.assertEqual(self.con_fee_token.balance_of(address=self.fee_collector), 1)
        self.assertEqual(self.con_fee_token.get_total_supply(), 1000)

    def test_transfer_with_higher_fee(self):
        print("\n--- Test: Transfer With Higher Fee ---")
        self.con_fee_token.mint_to(amount=1000, to=self.alice, signer=self.operator)
        self.con_fee_token.set_fee_percentage(percentage=10, signer=self.operator)

        self.con_fee_token.transfer(amount=255, to=self.bob, signer=self.alice)

        # floor(255 * 10 / 100) == 25, remainder stays with the recipient
        self.assertEqual(self.con_fee_token.balance_of(address=self.bob), 230)
        self.assertEqual(self.con_fee_token.balance_of(address=self.fee_collector), 25)
        self.assertEqual(self.con_fee_token.balance_of(address=self.alice), 745)

    def test_burn_after_transfer(self):
        print("\n--- Test: Burn After Transfer ---")
        self.con_fee_token.mint_to(amount=1000, to=self.alice, signer=self.operator)
        self.con_fee_token.transfer(amount=100, to=self.bob, signer=self.alice)
        self.assertEqual(self.con_fee_token.balance_of(address=self.alice), 900)

        self.con_fee_token.burn(amount=100, signer=self.alice)

        self.assertEqual(self.con_fee_token.balance_of(address=self.alice), 800)
        self.assertEqual(self.con_fee_token.get_total_supply(), 900)

    def test_burn_from_empty_account_fails(self):
        print("\n--- Test: Burn From Empty Account Fails ---")
        self.con_fee_token.mint_to(amount=1000, to=self.alice, signer=self.operator)

        with self.assertRaisesRegex(AssertionError, "Burn amount exceeds balance"):
            self.con_fee_token.burn(amount=1, signer=self.bob)

        self.assertEqual(self.con_fee_token.balance_of(address=self.bob), 0)
        self.assertEqual(self.con_fee_token.get_total_supply(), 1000)

    def test_non_owner_cannot_set_fee_percentage(self):
        print("\n--- Test: Non-Owner Cannot Set Fee Percentage ---")
        with self.assertRaisesRegex(AssertionError, "Only owner can set fee percentage"):
            self.con_fee_token.set_fee_percentage(percentage=5, signer=self.alice)

        self.assertEqual(self.con_fee_token.get_fee_percentage(), 1)

    def test_transfer_from_without_approve_fails(self):
        print("\n--- Test: Transfer From Without Approve Fails ---")
        self.con_fee_token.mint_to(amount=1000, to=self.alice, signer=self.operator)

        with self.assertRaisesRegex(AssertionError, "Transfer amount 100 exceeds allowance 0"):
            self.con_fee_token.transfer_from(
                amount=100, to=self.charlie, main_account=self.alice, signer=self.bob
            )

        self.assertEqual(self.con_fee_token.balance_of(address=self.alice), 1000)
        self.assertEqual(self.con_fee_token.balance_of(address=self.charlie), 0)

    def test_transfer_from_with_approve(self):
        print("\n--- Test: Transfer From With Approve ---")
        self.con_fee_token.mint_to(amount=1000, to=self.alice, signer=self.operator)
        self.con_fee_token.approve(amount=300, to=self.bob, signer=self.alice)
        self.assertEqual(self.con_fee_token.allowance(main_account=self.alice, spender=self.bob), 300)

        self.con_fee_token.transfer_from(
            amount=200, to=self.charlie, main_account=self.alice, signer=self.bob
        )

        self.assertEqual(self.con_fee_token.balance_of(address=self.alice), 800)
        self.assertEqual(self.con_fee_token.balance_of(address=self.charlie), 198)
        self.assertEqual(self.con_fee_token.balance_of(address=self.fee_collector), 2)
        # The spender moves funds but never receives them
        self.assertEqual(self.con_fee_token.balance_of(address=self.bob), 0)
        self.assertEqual(self.con_fee_token.allowance(main_account=self.alice, spender=self.bob), 100)

    def test_approve_overwrites(self):
        print("\n--- Test: Approve Overwrites ---")
        self.con_fee_token.approve(amount=300, to=self.bob, signer=self.alice)
        self.con_fee_token.approve(amount=50, to=self.bob, signer=self.alice)
        self.assertEqual(self.con_fee_token.allowance(main_account=self.alice, spender=self.bob), 50)

        self.con_fee_token.approve(amount=0, to=self.bob, signer=self.alice)
        self.assertEqual(self.con_fee_token.allowance(main_account=self.alice, spender=self.bob), 0)

    def test_transfer_failures(self):
        print("\n--- Test: Transfer Failures ---")
        self.con_fee_token.mint_to(amount=1000, to=self.alice, signer=self.operator)

        with self.assertRaisesRegex(AssertionError, "Insufficient amount"):
            self.con_fee_token.transfer(amount=0, to=self.bob, signer=self.alice)

        with self.assertRaisesRegex(AssertionError, "Insufficient amount"):
            self.con_fee_token.transfer(amount=-10, to=self.bob, signer=self.alice)

        with self.assertRaisesRegex(AssertionError, "Invalid recipient"):
            self.con_fee_token.transfer(amount=10, to='0' * 64, signer=self.alice)

        with self.assertRaisesRegex(AssertionError, "Invalid recipient"):
            self.con_fee_token.transfer(amount=10, to='', signer=self.alice)

        with self.assertRaisesRegex(AssertionError, "Transfer amount exceeds balance"):
            self.con_fee_token.transfer(amount=1001, to=self.bob, signer=self.alice)

        self.assertEqual(self.con_fee_token.balance_of(address=self.alice), 1000)
        self.assertEqual(self.con_fee_token.balance_of(address=self.bob), 0)
        self.assertEqual(self.con_fee_token.balance_of(address=self.fee_collector), 0)

    def test_mint_failures(self):
        print("\n--- Test: Mint Failures ---")
        with self.assertRaisesRegex(AssertionError, "Only owner can mint"):
            self.con_fee_token.mint_to(amount=1000, to=self.alice, signer=self.alice)

        with self.assertRaisesRegex(AssertionError, "Insufficient amount"):
            self.con_fee_token.mint_to(amount=0, to=self.alice, signer=self.operator)

        with self.assertRaisesRegex(AssertionError, "Invalid receiver"):
            self.con_fee_token.mint_to(amount=1000, to='0' * 64, signer=self.operator)

        self.assertEqual(self.con_fee_token.get_total_supply(), 0)
        self.assertEqual(self.con_fee_token.balance_of(address=self.alice), 0)


if __name__ == '__main__':
    unittest.main()
