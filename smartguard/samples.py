"""Bundled sample contract with deliberately vulnerable code."""

_EXAMPLE_CONTRACT = """\
// SPDX-License-Identifier: MIT
pragma solidity ^0.8.0;

contract VulnerableContract {
    mapping(address => uint256) public balances;

    function deposit() public payable {
        balances[msg.sender] += msg.value;
    }

    function withdraw(uint256 amount) public {
        require(balances[msg.sender] >= amount, "Insufficient balance");

        // Vulnerable to reentrancy
        (bool success, ) = msg.sender.call{value: amount}("");
        require(success, "Transfer failed");

        balances[msg.sender] -= amount;
    }

    function getBlockTimestamp() public view returns (uint256) {
        // Timestamp dependence
        return block.timestamp;
    }

    function isOwner() public view returns (bool) {
        // tx.origin vulnerability
        return tx.origin == msg.sender;
    }

    function riskyOperation() public {
        // Unchecked return value
        address(0x123).send(1 ether);
    }

    function generateRandomNumber() public view returns (uint256) {
        // Weak randomness
        return uint256(keccak256(abi.encodePacked(block.timestamp, block.number)));
    }

    function processLargeArray(uint256[] memory data) public {
        // Potential DoS with gas limit
        for (uint256 i = 0; i < data.length; i++) {
            // Do something with each element
            balances[msg.sender] += data[i];
        }
    }

    function dangerousFunction(address target, bytes memory data) public {
        // Dangerous delegatecall
        (bool success, ) = target.delegatecall(data);
        require(success, "Delegatecall failed");
    }
}"""


def get_example_contract() -> str:
    """Return the source of the bundled vulnerable example contract."""
    return _EXAMPLE_CONTRACT
