"""Contract ABIs and the burnable ERC-20 template deployed by ``createToken``."""

from __future__ import annotations

TOKEN_DECIMALS = 18

# keccak256("Transfer(address,address,uint256)")
TRANSFER_EVENT_TOPIC = "0xddf252ad1be2c89b69c2b068fc378daa952ba7f163c4a11628f55a4df523b3ef"

ERC20_ABI: list[dict] = [
    {
        "type": "function",
        "name": "transfer",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "to", "type": "address"},
            {"name": "value", "type": "uint256"},
        ],
        "outputs": [{"name": "", "type": "bool"}],
    },
    {
        "type": "function",
        "name": "balanceOf",
        "stateMutability": "view",
        "inputs": [{"name": "account", "type": "address"}],
        "outputs": [{"name": "", "type": "uint256"}],
    },
    {
        "type": "function",
        "name": "burn",
        "stateMutability": "nonpayable",
        "inputs": [{"name": "value", "type": "uint256"}],
        "outputs": [{"name": "", "type": "bool"}],
    },
    {
        "type": "function",
        "name": "decimals",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "uint8"}],
    },
    {
        "type": "function",
        "name": "symbol",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "string"}],
    },
    {
        "type": "function",
        "name": "name",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "string"}],
    },
    {
        "type": "function",
        "name": "totalSupply",
        "stateMutability": "view",
        "inputs": [],
        "outputs": [{"name": "", "type": "uint256"}],
    },
    {
        "type": "event",
        "name": "Transfer",
        "anonymous": False,
        "inputs": [
            {"name": "from", "type": "address", "indexed": True},
            {"name": "to", "type": "address", "indexed": True},
            {"name": "value", "type": "uint256", "indexed": False},
        ],
    },
]

BURNABLE_TOKEN_ABI: list[dict] = [
    {
        "type": "constructor",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "_name", "type": "string"},
            {"name": "_symbol", "type": "string"},
            {"name": "_initialSupply", "type": "uint256"},
        ],
    },
    *ERC20_ABI,
]

# Compiled with solc 0.8.26; constructor mints the full supply to the deployer.
BURNABLE_TOKEN_BYTECODE = (
    "0x6080604052601260025f6101000a81548160ff021916908360ff16021790555034801561002a575f80fd5b"
    "50604051611822380380611822833981810160405281019061004c91906102a1565b825f908161005a919061"
    "052d565b50816001908161006a919061052d565b50806003819055508060045f3373ffffffffffffffffffff"
    "ffffffffffffffffffff1673ffffffffffffffffffffffffffffffffffffffff168152602001908152602001"
    "5f20819055503373ffffffffffffffffffffffffffffffffffffffff165f73ffffffffffffffffffffffffff"
    "ffffffffffffff167fddf252ad1be2c89b69c2b068fc378daa952ba7f163c4a11628f55a4df523b3ef836040"
    "51610111919061060b565b60405180910390a3505050610624565b5f604051905090565b5f80fd5b5f80fd5b"
    "5f80fd5b5f80fd5b5f601f19601f8301169050919050565b7f4e487b71000000000000000000000000000000"
    "000000000000000000000000005f52604160045260245ffd5b6101808261013a565b810181811067ffffffff"
    "ffffffff8211171561019f5761019e61014a565b5b80604052505050565b5f6101b1610121565b90506101bd"
    "8282610177565b919050565b5f67ffffffffffffffff8211156101dc576101db61014a565b5b6101e5826101"
    "3a565b9050602081019050919050565b8281835e5f83830152505050565b5f61021261020d846101c2565b61"
    "01a8565b90508281526020810184848401111561022e5761022d610136565b5b6102398482856101f2565b50"
    "9392505050565b5f82601f83011261025557610254610132565b5b8151610265848260208601610200565b91"
    "505092915050565b5f819050919050565b6102808161026e565b811461028a575f80fd5b50565b5f81519050"
    "61029b81610277565b92915050565b5f805f606084860312156102b8576102b761012a565b5b5f84015167ff"
    "ffffffffffffff8111156102d5576102d461012e565b5b6102e186828701610241565b935050602084015167"
    "ffffffffffffffff8111156103025761030161012e565b5b61030e86828701610241565b925050604061031f"
    "8682870161028d565b9150509250925092565b5f81519050919050565b7f4e487b7100000000000000000000"
    "0000000000000000000000000000000000005f52602260045260245ffd5b5f60028204905060018216806103"
    "7757607f821691505b60208210810361038a57610389610333565b5b50919050565b5f819050815f5260205f"
    "209050919050565b5f6020601f8301049050919050565b5f82821b905092915050565b5f600883026103ec7f"
    "ffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffffff826103b1565b6103f6868361"
    "03b1565b95508019841693508086168417925050509392505050565b5f819050919050565b5f61043161042c"
    "6104278461026e565b61040e565b61026e565b9050919050565b5f819050919050565b61044a83610417565b"
    "61045e61045682610438565b8484546103bd565b825550505050565b5f90565b610472610466565b61047d81"
    "8484610441565b505050565b5b818110156104a0576104955f8261046a565b600181019050610483565b5050"
    "565b601f8211156104e5576104b681610390565b6104bf846103a2565b810160208510156104ce578190505b"
    "6104e26104da856103a2565b830182610482565b50505b505050565b5f82821c905092915050565b5f610505"
    "5f19846008026104ea565b1980831691505092915050565b5f61051d83836104f6565b915082600202821790"
    "5092915050565b61053682610329565b67ffffffffffffffff81111561054f5761054e61014a565b5b610559"
    "8254610360565b6105648282856104a4565b5f60209050601f831160018114610595575f8415610583578287"
    "015190505b61058d8582610512565b8655506105f4565b601f1984166105a386610390565b5f5b8281101561"
    "05ca578489015182556001820191506020850194506020810190506105a5565b868310156105e75784890151"
    "6105e3601f8916826104f6565b8355505b6001600288020188555050505b505050505050565b610605816102"
    "6e565b82525050565b5f60208201905061061e5f8301846105fc565b92915050565b6111f1806106315f395f"
    "f3fe608060405234801561000f575f80fd5b506004361061009c575f3560e01c806342966c68116100645780"
    "6342966c681461015a57806370a082311461018a57806395d89b41146101ba578063a9059cbb146101d85780"
    "63dd62ed3e146102085761009c565b806306fdde03146100a0578063095ea7b3146100be57806318160ddd14"
    "6100ee57806323b872dd1461010c578063313ce5671461013c575b5f80fd5b6100a8610238565b6040516100"
    "b59190610c61565b60405180910390f35b6100d860048036038101906100d39190610d12565b6102c3565b60"
    "40516100e59190610d6a565b60405180910390f35b6100f66103b0565b6040516101039190610d92565b6040"
    "5180910390f35b61012660048036038101906101219190610dab565b6103b6565b6040516101339190610d6a"
    "565b60405180910390f35b610144610772565b6040516101519190610e16565b60405180910390f35b610174"
    "600480360381019061016f9190610e2f565b610784565b6040516101819190610d6a565b60405180910390f3"
    "5b6101a4600480360381019061019f9190610e5a565b61092c565b6040516101b19190610d92565b60405180"
    "910390f35b6101c2610941565b6040516101cf9190610c61565b60405180910390f35b6101f2600480360381"
    "01906101ed9190610d12565b6109cd565b6040516101ff9190610d6a565b60405180910390f35b6102226004"
    "80360381019061021d9190610e85565b610bd1565b60405161022f9190610d92565b60405180910390f35b5f"
    "805461024490610ef0565b80601f016020809104026020016040519081016040528092919081815260200182"
    "805461027090610ef0565b80156102bb5780601f10610292576101008083540402835291602001916102bb56"
    "5b820191905f5260205f20905b81548152906001019060200180831161029e57829003601f168201915b5050"
    "50505081565b5f8160055f3373ffffffffffffffffffffffffffffffffffffffff1673ffffffffffffffffff"
    "ffffffffffffffffffffff1681526020019081526020015f205f8573ffffffffffffffffffffffffffffffff"
    "ffffffff1673ffffffffffffffffffffffffffffffffffffffff1681526020019081526020015f2081905550"
    "8273ffffffffffffffffffffffffffffffffffffffff163373ffffffffffffffffffffffffffffffffffffff"
    "ff167f8c5be1e5ebec7d5bd14f71427d1e84f3dd0314c0f7b2291e5b200ac8c7c3b9258460405161039e9190"
    "610d92565b60405180910390a36001905092915050565b60035481565b5f8073ffffffffffffffffffffffff"
    "ffffffffffffffff168473ffffffffffffffffffffffffffffffffffffffff1603610425576040517f08c379"
    "a000000000000000000000000000000000000000000000000000000000815260040161041c90610f6a565b60"
    "405180910390fd5b5f73ffffffffffffffffffffffffffffffffffffffff168373ffffffffffffffffffffff"
    "ffffffffffffffffff1603610493576040517f08c379a0000000000000000000000000000000000000000000"
    "00000000000000815260040161048a90610fd2565b60405180910390fd5b8160045f8673ffffffffffffffff"
    "ffffffffffffffffffffffff1673ffffffffffffffffffffffffffffffffffffffff16815260200190815260"
    "20015f20541015610513576040517f08c379a000000000000000000000000000000000000000000000000000"
    "000000815260040161050a9061103a565b60405180910390fd5b8160055f8673ffffffffffffffffffffffff"
    "ffffffffffffffff1673ffffffffffffffffffffffffffffffffffffffff1681526020019081526020015f20"
    "5f3373ffffffffffffffffffffffffffffffffffffffff1673ffffffffffffffffffffffffffffffffffffff"
    "ff1681526020019081526020015f205410156105ce576040517f08c379a00000000000000000000000000000"
    "000000000000000000000000000081526004016105c5906110a2565b60405180910390fd5b8160045f8673ff"
    "ffffffffffffffffffffffffffffffffffffff1673ffffffffffffffffffffffffffffffffffffffff168152"
    "6020019081526020015f205f82825461061a91906110ed565b925050819055508160045f8573ffffffffffff"
    "ffffffffffffffffffffffffffff1673ffffffffffffffffffffffffffffffffffffffff1681526020019081"
    "526020015f205f82825461066d9190611120565b925050819055508160055f8673ffffffffffffffffffffff"
    "ffffffffffffffffff1673ffffffffffffffffffffffffffffffffffffffff1681526020019081526020015f"
    "205f3373ffffffffffffffffffffffffffffffffffffffff1673ffffffffffffffffffffffffffffffffffff"
    "ffff1681526020019081526020015f205f8282546106fb91906110ed565b925050819055508273ffffffffff"
    "ffffffffffffffffffffffffffffff168473ffffffffffffffffffffffffffffffffffffffff167fddf252ad"
    "1be2c89b69c2b068fc378daa952ba7f163c4a11628f55a4df523b3ef8460405161075f9190610d92565b6040"
    "5180910390a3600190509392505050565b60025f9054906101000a900460ff1681565b5f8160045f3373ffff"
    "ffffffffffffffffffffffffffffffffffff1673ffffffffffffffffffffffffffffffffffffffff16815260"
    "20019081526020015f20541015610805576040517f08c379a000000000000000000000000000000000000000"
    "00000000000000000081526004016107fc9061103a565b60405180910390fd5b8160045f3373ffffffffffff"
    "ffffffffffffffffffffffffffff1673ffffffffffffffffffffffffffffffffffffffff1681526020019081"
    "526020015f205f82825461085191906110ed565b925050819055508160035f82825461086991906110ed565b"
    "925050819055503373ffffffffffffffffffffffffffffffffffffffff167fcc16f5dbb4873280815c1ee09d"
    "bd06736cffcc184412cf7a71a0fdb75d397ca5836040516108b69190610d92565b60405180910390a25f73ff"
    "ffffffffffffffffffffffffffffffffffffff163373ffffffffffffffffffffffffffffffffffffffff167f"
    "ddf252ad1be2c89b69c2b068fc378daa952ba7f163c4a11628f55a4df523b3ef8460405161091b9190610d92"
    "565b60405180910390a360019050919050565b6004602052805f5260405f205f915090505481565b60018054"
    "61094e90610ef0565b80601f0160208091040260200160405190810160405280929190818152602001828054"
    "61097a90610ef0565b80156109c55780601f1061099c576101008083540402835291602001916109c5565b82"
    "0191905f5260205f20905b8154815290600101906020018083116109a857829003601f168201915b50505050"
    "5081565b5f8073ffffffffffffffffffffffffffffffffffffffff168373ffffffffffffffffffffffffffff"
    "ffffffffffff1603610a3c576040517f08c379a0000000000000000000000000000000000000000000000000"
    "000000008152600401610a339061119d565b60405180910390fd5b8160045f3373ffffffffffffffffffffff"
    "ffffffffffffffffff1673ffffffffffffffffffffffffffffffffffffffff1681526020019081526020015f"
    "20541015610abc576040517f08c379a000000000000000000000000000000000000000000000000000000000"
    "8152600401610ab39061103a565b60405180910390fd5b8160045f3373ffffffffffffffffffffffffffffff"
    "ffffffffff1673ffffffffffffffffffffffffffffffffffffffff1681526020019081526020015f205f8282"
    "54610b0891906110ed565b925050819055508160045f8573ffffffffffffffffffffffffffffffffffffffff"
    "1673ffffffffffffffffffffffffffffffffffffffff1681526020019081526020015f205f828254610b5b91"
    "90611120565b925050819055508273ffffffffffffffffffffffffffffffffffffffff163373ffffffffffff"
    "ffffffffffffffffffffffffffff167fddf252ad1be2c89b69c2b068fc378daa952ba7f163c4a11628f55a4d"
    "f523b3ef84604051610bbf9190610d92565b60405180910390a36001905092915050565b6005602052815f52"
    "60405f20602052805f5260405f205f91509150505481565b5f81519050919050565b5f828252602082019050"
    "92915050565b8281835e5f83830152505050565b5f601f19601f8301169050919050565b5f610c3382610bf1"
    "565b610c3d8185610bfb565b9350610c4d818560208601610c0b565b610c5681610c19565b84019150509291"
    "5050565b5f6020820190508181035f830152610c798184610c29565b905092915050565b5f80fd5b5f73ffff"
    "ffffffffffffffffffffffffffffffffffff82169050919050565b5f610cae82610c85565b9050919050565b"
    "610cbe81610ca4565b8114610cc8575f80fd5b50565b5f81359050610cd981610cb5565b92915050565b5f81"
    "9050919050565b610cf181610cdf565b8114610cfb575f80fd5b50565b5f81359050610d0c81610ce8565b92"
    "915050565b5f8060408385031215610d2857610d27610c81565b5b5f610d3585828601610ccb565b92505060"
    "20610d4685828601610cfe565b9150509250929050565b5f8115159050919050565b610d6481610d50565b82"
    "525050565b5f602082019050610d7d5f830184610d5b565b92915050565b610d8c81610cdf565b8252505056"
    "5b5f602082019050610da55f830184610d83565b92915050565b5f805f60608486031215610dc257610dc161"
    "0c81565b5b5f610dcf86828701610ccb565b9350506020610de086828701610ccb565b9250506040610df186"
    "828701610cfe565b9150509250925092565b5f60ff82169050919050565b610e1081610dfb565b8252505056"
    "5b5f602082019050610e295f830184610e07565b92915050565b5f60208284031215610e4457610e43610c81"
    "565b5b5f610e5184828501610cfe565b91505092915050565b5f60208284031215610e6f57610e6e610c8156"
    "5b5b5f610e7c84828501610ccb565b91505092915050565b5f8060408385031215610e9b57610e9a610c8156"
    "5b5b5f610ea885828601610ccb565b9250506020610eb985828601610ccb565b9150509250929050565b7f4e"
    "487b71000000000000000000000000000000000000000000000000000000005f52602260045260245ffd5b5f"
    "6002820490506001821680610f0757607f821691505b602082108103610f1a57610f19610ec3565b5b509190"
    "50565b7f496e76616c69642066726f6d20616464726573730000000000000000000000005f82015250565b5f"
    "610f54601483610bfb565b9150610f5f82610f20565b602082019050919050565b5f6020820190508181035f"
    "830152610f8181610f48565b9050919050565b7f496e76616c696420746f2061646472657373000000000000"
    "00000000000000005f82015250565b5f610fbc601283610bfb565b9150610fc782610f88565b602082019050"
    "919050565b5f6020820190508181035f830152610fe981610fb0565b9050919050565b7f496e737566666963"
    "69656e742062616c616e63650000000000000000000000005f82015250565b5f611024601483610bfb565b91"
    "5061102f82610ff0565b602082019050919050565b5f6020820190508181035f83015261105181611018565b"
    "9050919050565b7f496e73756666696369656e7420616c6c6f77616e6365000000000000000000005f820152"
    "50565b5f61108c601683610bfb565b915061109782611058565b602082019050919050565b5f602082019050"
    "8181035f8301526110b981611080565b9050919050565b7f4e487b7100000000000000000000000000000000"
    "0000000000000000000000005f52601160045260245ffd5b5f6110f782610cdf565b915061110283610cdf56"
    "5b925082820390508181111561111a576111196110c0565b5b92915050565b5f61112a82610cdf565b915061"
    "113583610cdf565b925082820190508082111561114d5761114c6110c0565b5b92915050565b7f496e76616c"
    "6964206164647265737300000000000000000000000000000000005f82015250565b5f611187600f83610bfb"
    "565b915061119282611153565b602082019050919050565b5f6020820190508181035f8301526111b4816111"
    "7b565b905091905056fea264697066735822122082c07cd3182cc847423571400a3f9bd36735b562f3bb49ba"
    "898c64f54697bfd464736f6c634300081a0033"
)
